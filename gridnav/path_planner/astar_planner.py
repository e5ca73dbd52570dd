#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径规划模块：实现 A* 算法进行路径规划
"""

# 标准库导入
from typing import Dict, List, Optional, Tuple
import heapq
import itertools

# 第三方库导入
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
from gridnav.path_planner.path_utils import move_cost, reconstruct_path


def astar(grid: GridLike, start: Point, goal: Point, allow_diagonal: bool = True) -> PathResult:
    """
    A* 算法核心实现

    按 f = g + h 排序开放集；启发式在允许斜线时为切比雪夫距离，
    否则为曼哈顿距离；边代价与 Dijkstra 相同。
    节点出堆时加入 visited，同一节点可以以不同 g 值多次入堆，
    出堆时 g 已过期的条目直接丢弃。

    Args:
        grid: 栅格地图（0=可通行，1=障碍）
        start: 起点
        goal: 终点
        allow_diagonal: 是否允许斜线移动

    Returns:
        PathResult，无法到达时 path 为空
    """
    grid = as_grid(grid)
    start, goal = as_point(start), as_point(goal)
    height, width = grid.shape[:2]

    logger.debug(f"[A*] 开始路径规划: grid_size=({width}, {height}), start={start}, goal={goal}")

    if start == goal:
        return PathResult(path=[start], visited={point_key(start)})

    if not is_free(grid, start):
        logger.warning(f"[A*] 起点越界或位于障碍物上: {start}")
        return PathResult()

    start_key = point_key(start)
    came_from: Dict[str, Optional[str]] = {start_key: None}
    g_score: Dict[str, float] = {start_key: 0.0}
    visited = set()

    # 优先队列：(f_score, 序号, g_score, current)
    counter = itertools.count()
    open_set: List[Tuple[float, int, float, Point]] = [
        (heuristic(start, goal, allow_diagonal), next(counter), 0.0, start)
    ]

    while open_set:
        _, _, current_g, current = heapq.heappop(open_set)
        k = point_key(current)
        if current_g > g_score[k]:
            continue
        visited.add(k)

        # 到达终点
        if current == goal:
            break

        # 探索邻居
        for nb in neighbors(grid, current, allow_diagonal):
            nk = point_key(nb)
            new_g = current_g + move_cost(current, nb)

            # 如果找到更短的路径
            if new_g < g_score.get(nk, float('inf')):
                g_score[nk] = new_g
                came_from[nk] = k
                f_score = new_g + heuristic(nb, goal, allow_diagonal)
                heapq.heappush(open_set, (f_score, next(counter), new_g, nb))

    path = reconstruct_path(came_from, start, goal)
    if path:
        logger.info(f"[A*] 路径规划成功: 路径长度={len(path)}, 探索节点数={len(visited)}")
    else:
        logger.warning(f"[A*] 无法找到从起点到终点的路径: start={start}, goal={goal}, 探索节点数={len(visited)}")
    return PathResult(path=path, visited=visited)
