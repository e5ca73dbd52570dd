#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
跳点搜索（Jump Point Search）

A* 的加速变体：后继不是相邻格子而是跳点。沿固定方向一直前进，
直到遇到障碍、终点或存在强制邻居的格子。
始终允许斜线移动，并与栅格模型一致禁止切角：
斜线一步要求两个相邻直线格子都可通行。
"""

import heapq
import itertools
from typing import Dict, List, Optional, Tuple

import numpy as np
from loguru import logger

from gridnav.path_planner.grid_model import (
    GridLike,
    Point,
    as_grid,
    as_point,
    heuristic,
    is_free,
    neighbors,
    point_key,
)
from gridnav.path_planner.map_model import PathResult
from gridnav.path_planner.path_utils import densify, distance


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def _has_forced_neighbor(grid: np.ndarray, x: int, y: int, dx: int, dy: int) -> bool:
    """直线移动时是否存在强制邻居（侧面格子可通行，而其身后的格子是障碍）"""
    if dx != 0:
        return ((is_free(grid, (x, y - 1)) and not is_free(grid, (x - dx, y - 1))) or
                (is_free(grid, (x, y + 1)) and not is_free(grid, (x - dx, y + 1))))
    return ((is_free(grid, (x - 1, y)) and not is_free(grid, (x - 1, y - dy))) or
            (is_free(grid, (x + 1, y)) and not is_free(grid, (x + 1, y - dy))))


def _jump(grid: np.ndarray, x: int, y: int, dx: int, dy: int, goal: Point) -> Optional[Point]:
    """
    从 (x, y) 开始沿 (dx, dy) 方向跳跃

    (x, y) 是从上一个格子迈出一步后到达的格子。

    Returns:
        跳点坐标，碰到障碍或边界返回 None
    """
    while True:
        if not is_free(grid, (x, y)):
            return None
        if (x, y) == goal:
            return (x, y)

        if dx != 0 and dy != 0:
            # 斜线移动时，递归搜索水平和垂直方向
            if (_jump(grid, x + dx, y, dx, 0, goal) is not None or
                    _jump(grid, x, y + dy, 0, dy, goal) is not None):
                return (x, y)
            # 继续斜线前进不能切角
            if not (is_free(grid, (x + dx, y)) and is_free(grid, (x, y + dy))):
                return None
        elif _has_forced_neighbor(grid, x, y, dx, dy):
            return (x, y)

        x += dx
        y += dy


def _pruned_neighbors(grid: np.ndarray, p: Point, parent: Point) -> List[Point]:
    """根据来自父节点的方向裁剪出需要搜索的邻居（含强制邻居）"""
    x, y = p
    dx = _sign(x - parent[0])
    dy = _sign(y - parent[1])
    out: List[Point] = []

    if dx != 0 and dy != 0:
        walk_x = is_free(grid, (x + dx, y))
        walk_y = is_free(grid, (x, y + dy))
        if walk_y:
            out.append((x, y + dy))
        if walk_x:
            out.append((x + dx, y))
        if walk_x and walk_y:
            out.append((x + dx, y + dy))
    elif dx != 0:
        walk_next = is_free(grid, (x + dx, y))
        walk_up = is_free(grid, (x, y - 1))
        walk_down = is_free(grid, (x, y + 1))
        if walk_next:
            out.append((x + dx, y))
            if walk_up:
                out.append((x + dx, y - 1))
            if walk_down:
                out.append((x + dx, y + 1))
        if walk_up:
            out.append((x, y - 1))
        if walk_down:
            out.append((x, y + 1))
    else:
        walk_next = is_free(grid, (x, y + dy))
        walk_left = is_free(grid, (x - 1, y))
        walk_right = is_free(grid, (x + 1, y))
        if walk_next:
            out.append((x, y + dy))
            if walk_left:
                out.append((x - 1, y + dy))
            if walk_right:
                out.append((x + 1, y + dy))
        if walk_left:
            out.append((x - 1, y))
        if walk_right:
            out.append((x + 1, y))

    return out


def _successors(grid: np.ndarray, p: Point, parent: Optional[Point], goal: Point) -> List[Point]:
    """当前节点的所有跳点后继；起点（无父节点）搜索全部 8 个方向"""
    candidates = neighbors(grid, p, True) if parent is None else _pruned_neighbors(grid, p, parent)
    jump_points: List[Point] = []
    for n in candidates:
        jp = _jump(grid, n[0], n[1], n[0] - p[0], n[1] - p[1], goal)
        if jp is not None:
            jump_points.append(jp)
    return jump_points


def _reconstruct_jps_path(parent: Dict[str, Optional[Point]], goal: Point) -> List[Point]:
    """回溯稀疏跳点序列并在相邻跳点之间插值"""
    key_points: List[Point] = []
    current: Optional[Point] = goal
    while current is not None:
        key_points.append(current)
        current = parent[point_key(current)]
    key_points.reverse()
    return densify(key_points)


def jps(grid: GridLike, start: Point, goal: Point) -> PathResult:
    """
    JPS 路径搜索

    开放集按 f = g + h 排序（切比雪夫启发式），节点出堆时加入 visited。

    Args:
        grid: 栅格地图（0=可通行，1=障碍）
        start: 起点
        goal: 终点

    Returns:
        PathResult，visited 为出堆的跳点
    """
    grid = as_grid(grid)
    start, goal = as_point(start), as_point(goal)

    logger.debug(f"[JPS] 开始搜索: start={start}, goal={goal}")

    if start == goal:
        return PathResult(path=[start], visited={point_key(start)})

    if not is_free(grid, start):
        logger.warning(f"[JPS] 起点越界或位于障碍物上: {start}")
        return PathResult()

    start_key = point_key(start)
    g_score: Dict[str, float] = {start_key: 0.0}
    parent: Dict[str, Optional[Point]] = {start_key: None}
    visited = set()

    counter = itertools.count()
    open_set: List[Tuple[float, int, float, Point]] = [
        (heuristic(start, goal, True), next(counter), 0.0, start)
    ]

    while open_set:
        _, _, current_g, current = heapq.heappop(open_set)
        current_key = point_key(current)
        if current_key in visited:
            continue
        visited.add(current_key)

        if current == goal:
            path = _reconstruct_jps_path(parent, goal)
            logger.info(f"[JPS] 路径规划成功: 路径长度={len(path)}, 跳点数={len(visited)}")
            return PathResult(path=path, visited=visited)

        for successor in _successors(grid, current, parent[current_key], goal):
            successor_key = point_key(successor)
            if successor_key in visited:
                continue
            tentative_g = current_g + distance(current, successor)
            if tentative_g < g_score.get(successor_key, float('inf')):
                g_score[successor_key] = tentative_g
                parent[successor_key] = current
                f = tentative_g + heuristic(successor, goal, True)
                heapq.heappush(open_set, (f, next(counter), tentative_g, successor))

    logger.warning(f"[JPS] 无法找到路径: start={start}, goal={goal}, 跳点数={len(visited)}")
    return PathResult(path=[], visited=visited)
