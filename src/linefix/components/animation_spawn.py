from dataclasses import dataclass
from typing import Tuple

@dataclass(slots=True)
class SpawnAnimation:
    pos: Tuple[int,int]
    rank: int
    delay: float = 0.0
    scale: float = 0.0  # 0..1
