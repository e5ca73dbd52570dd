#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
栅格模型：占用栅格的表示、边界检查与邻居查询

约定：
- 栅格为二维数组，grid[y, x]，0=可通行，非0=障碍
- 坐标点为 (x, y) 元组，x 为列，y 为行
- 点的字符串键为 "x,y"，用于 visited / 前驱表等集合
"""

from typing import List, Sequence, Tuple, Union

import numpy as np

from gridnav.common.constants import BLOCKED, DIRECTIONS_4WAY, DIRECTIONS_8WAY, FREE
from gridnav.common.exceptions import GridFormatError

Point = Tuple[int, int]  # (x, y)
GridLike = Union[np.ndarray, Sequence[Sequence[int]]]


def as_grid(grid: GridLike) -> np.ndarray:
    """将输入转换为二维 numpy 数组（不做校验，已是 ndarray 时不复制）"""
    return np.asarray(grid)


def as_point(p: Sequence[int]) -> Point:
    """将任意二元序列规范化为整数坐标元组"""
    return (int(p[0]), int(p[1]))


def point_key(p: Point) -> str:
    """点的规范字符串键 "x,y" """
    return f"{p[0]},{p[1]}"


def parse_key(key: str) -> Point:
    """point_key 的逆操作"""
    x, y = key.split(",")
    return (int(x), int(y))


def make_grid(rows: GridLike) -> np.ndarray:
    """
    校验并规范化栅格

    Args:
        rows: 0/1 矩阵（嵌套列表或 ndarray）

    Returns:
        uint8 栅格，0=可通行，1=障碍

    Raises:
        GridFormatError: 空栅格、行长度不一致或不是二维
    """
    if isinstance(rows, np.ndarray):
        arr = rows
    else:
        rows = list(rows)
        if not rows:
            raise GridFormatError("栅格不能为空")
        widths = {len(r) for r in rows}
        if len(widths) != 1:
            raise GridFormatError(f"栅格各行长度不一致: {sorted(widths)}")
        arr = np.array(rows)

    if arr.ndim != 2:
        raise GridFormatError(f"栅格必须是二维的: ndim={arr.ndim}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise GridFormatError(f"栅格尺寸必须大于0: shape={arr.shape}")

    return np.where(arr != FREE, BLOCKED, FREE).astype(np.uint8)


def create_grid(rows: int, cols: int) -> np.ndarray:
    """创建全可通行栅格"""
    if rows <= 0 or cols <= 0:
        raise GridFormatError(f"栅格尺寸必须大于0: rows={rows}, cols={cols}")
    return np.zeros((rows, cols), dtype=np.uint8)


def in_bounds(grid: np.ndarray, p: Point) -> bool:
    """0 <= y < rows 且 0 <= x < cols"""
    height, width = grid.shape[:2]
    return 0 <= p[1] < height and 0 <= p[0] < width


def is_free(grid: np.ndarray, p: Point) -> bool:
    """在边界内且不是障碍"""
    return in_bounds(grid, p) and grid[p[1], p[0]] == FREE


def free_cell_count(grid: np.ndarray) -> int:
    return int(np.count_nonzero(grid == FREE))


def neighbors(grid: np.ndarray, p: Point, allow_diagonal: bool = True) -> List[Point]:
    """
    获取可通行的相邻格子

    斜线移动要求两个相邻的直线格子都可通行（禁止切角），
    例如 (x,y)->(x+1,y+1) 需要 (x+1,y) 和 (x,y+1) 都可通行。

    Args:
        grid: 栅格
        p: 当前点
        allow_diagonal: 是否允许斜线移动

    Returns:
        最多 4 个（仅直线）或 8 个相邻点
    """
    x, y = p
    directions = DIRECTIONS_8WAY if allow_diagonal else DIRECTIONS_4WAY
    out: List[Point] = []
    for dx, dy in directions:
        n = (x + dx, y + dy)
        if not is_free(grid, n):
            continue
        if dx != 0 and dy != 0:
            if not (is_free(grid, (x + dx, y)) and is_free(grid, (x, y + dy))):
                continue
        out.append(n)
    return out


def heuristic(a: Point, b: Point, allow_diagonal: bool = True) -> float:
    """
    启发式函数

    允许斜线时用切比雪夫距离，否则用曼哈顿距离。
    """
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    if allow_diagonal:
        return max(dx, dy)
    return dx + dy
