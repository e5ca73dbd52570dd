#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径工具：距离、代价、直线碰撞检测、路径回溯与加密
"""

import math
from typing import Dict, List, Optional, Sequence

import numpy as np

from gridnav.common.constants import DIAGONAL_COST, ORTHOGONAL_COST
from gridnav.path_planner.grid_model import Point, is_free, parse_key, point_key


def round_half_up(v: float) -> int:
    """四舍五入（.5 向上取整），Python 内置 round 是银行家舍入"""
    return int(math.floor(v + 0.5))


def distance(a: Point, b: Point) -> float:
    """欧氏距离"""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def move_cost(a: Point, b: Point) -> float:
    """相邻两格的移动代价：直线 1，斜线 √2"""
    if a[0] != b[0] and a[1] != b[1]:
        return DIAGONAL_COST
    return ORTHOGONAL_COST


def path_cost(path: Sequence[Point]) -> float:
    """稠密路径的总代价"""
    return sum(move_cost(path[i], path[i + 1]) for i in range(len(path) - 1))


def extend(from_p: Point, to_p: Point, step_size: float) -> Point:
    """
    从 from_p 向 to_p 前进最多 step_size，结果取整到栅格坐标

    Args:
        from_p: 起点
        to_p: 目标采样点
        step_size: 步长

    Returns:
        新的候选点
    """
    dist = distance(from_p, to_p)
    if dist <= step_size:
        return to_p
    ratio = step_size / dist
    return (
        round_half_up(from_p[0] + (to_p[0] - from_p[0]) * ratio),
        round_half_up(from_p[1] + (to_p[1] - from_p[1]) * ratio),
    )


def _segment_cells(a: Point, b: Point) -> List[Point]:
    """按单位步长采样线段 a->b 经过的格子（含两端）"""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    steps = max(abs(dx), abs(dy))
    if steps == 0:
        return [a]
    return [
        (round_half_up(a[0] + dx * i / steps), round_half_up(a[1] + dy * i / steps))
        for i in range(steps + 1)
    ]


def is_path_clear(grid: np.ndarray, a: Point, b: Point) -> bool:
    """线段 a->b 上的所有采样格子都在边界内且可通行"""
    return all(is_free(grid, c) for c in _segment_cells(a, b))


def densify(key_points: Sequence[Point]) -> List[Point]:
    """
    在关键点之间插入中间格子，形成连续路径

    与 is_path_clear 使用同一套采样，所以插入的格子都已做过碰撞检测。
    相邻输出点之间只差一个直线或斜线步。
    """
    if not key_points:
        return []
    path: List[Point] = [key_points[0]]
    for i in range(len(key_points) - 1):
        for c in _segment_cells(key_points[i], key_points[i + 1])[1:]:
            if c != path[-1]:
                path.append(c)
    return path


def reconstruct_path(prev: Dict[str, Optional[str]], start: Point, goal: Point) -> List[Point]:
    """
    沿前驱表从终点回溯到起点

    Args:
        prev: 前驱表 key -> 前驱 key
        start: 起点
        goal: 终点

    Returns:
        从起点到终点的路径；终点未被到达时返回空列表
    """
    if start == goal:
        return [start]
    goal_key = point_key(goal)
    if goal_key not in prev:
        return []

    start_key = point_key(start)
    out: List[Point] = []
    cur: Optional[str] = goal_key
    while cur is not None:
        out.append(parse_key(cur))
        if cur == start_key:
            break
        cur = prev.get(cur)
    out.reverse()
    return out
