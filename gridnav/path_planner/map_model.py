from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

import numpy as np

GridCoord = Tuple[int, int]


@dataclass
class PathResult:
    path: List[GridCoord] = field(default_factory=list)  # 空列表 = 无路径
    visited: Set[str] = field(default_factory=set)       # "x,y" 键

    @property
    def found(self) -> bool:
        return len(self.path) > 0


@dataclass
class MapModel:
    grid: np.ndarray                 # 0/1 栅格：1=障碍
    size: Tuple[int, int]            # (grid_w, grid_h)

    @classmethod
    def from_grid(cls, grid: np.ndarray) -> "MapModel":
        h, w = grid.shape[:2]
        return cls(grid=grid, size=(w, h))


@dataclass
class PlanRequest:
    start: GridCoord
    goal: GridCoord
    algorithm: Optional[str] = None        # None = 使用配置
    allow_diagonal: Optional[bool] = None  # None = 使用配置


@dataclass
class PlanResult:
    ok: bool
    path: List[GridCoord]
    visited: Set[str] = field(default_factory=set)
    cost: float = 0.0
    reason: str = ""
