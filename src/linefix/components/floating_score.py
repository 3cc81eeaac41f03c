from dataclasses import dataclass
from typing import Tuple

@dataclass(slots=True)
class FloatingScore:
    """Short-lived "+rank" marker drawn above a freshly merged cell."""
    pos: Tuple[int,int]
    amount: int
    age: float = 0.0
