from dataclasses import dataclass
from typing import Tuple

@dataclass(slots=True)
class ShiftAnimation:
    src: Tuple[int,int]
    dst: Tuple[int,int]
    rank: int
    linear: float = 0.0  # 0..1
