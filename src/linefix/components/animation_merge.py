from dataclasses import dataclass
from typing import Tuple

@dataclass(slots=True)
class MergeAnimation:
    src: Tuple[int,int]
    dst: Tuple[int,int]
    rank: int
    chain: int
    # Seconds to wait before starting; later chain rounds play after earlier ones.
    delay: float = 0.0
    linear: float = 0.0  # 0..1
