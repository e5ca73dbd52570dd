#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
测试辅助工具：脚本化随机源、连通区域洪泛、随机栅格、路径检查
"""

from collections import deque
from typing import List, Optional, Sequence, Set, Tuple

import numpy as np

from gridnav.path_planner.grid_model import Point, is_free, neighbors, point_key


class ScriptedRng:
    """
    脚本化的随机数源

    samples 中 None 表示采样终点（random() 返回 0.0），
    (x, y) 表示均匀采样得到该点；脚本用完后一直采样终点。
    """

    def __init__(self, samples: Sequence[Optional[Point]] = ()):
        self._samples = list(samples)
        self._pending: List[int] = []

    def random(self) -> float:
        sample = self._samples.pop(0) if self._samples else None
        if sample is None:
            return 0.0
        self._pending = [sample[0], sample[1]]
        return 1.0

    def integers(self, low: int, high: int) -> int:
        return self._pending.pop(0)


def reachable_keys(grid: np.ndarray, start: Point, allow_diagonal: bool = True) -> Set[str]:
    """洪泛求起点所在连通区域（与 neighbors 的切角规则一致）"""
    seen = {point_key(start)}
    queue = deque([start])
    while queue:
        cur = queue.popleft()
        for nb in neighbors(grid, cur, allow_diagonal):
            k = point_key(nb)
            if k not in seen:
                seen.add(k)
                queue.append(nb)
    return seen


def random_grid(seed: int, size: Tuple[int, int] = (12, 12), density: float = 0.25) -> np.ndarray:
    """随机障碍栅格，(0,0) 与右下角强制可通行"""
    rng = np.random.default_rng(seed)
    w, h = size
    grid = (rng.random((h, w)) < density).astype(np.uint8)
    grid[0, 0] = 0
    grid[h - 1, w - 1] = 0
    return grid


def assert_grid_adjacent(grid: np.ndarray, path: Sequence[Point], allow_diagonal: bool = True) -> None:
    """相邻两点满足 neighbors 的移动规则（含禁止切角）"""
    for a, b in zip(path, path[1:]):
        assert b in neighbors(grid, a, allow_diagonal), f"{a} -> {b} 不是合法移动"


def assert_dense(grid: np.ndarray, path: Sequence[Point]) -> None:
    """稠密路径：相邻两点恰好直线或斜线相邻，且每个格子都可通行"""
    for p in path:
        assert is_free(grid, p), f"{p} 不可通行"
    for a, b in zip(path, path[1:]):
        assert max(abs(a[0] - b[0]), abs(a[1] - b[1])) == 1, f"{a} -> {b} 不相邻"
