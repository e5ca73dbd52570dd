#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Dijkstra 最短路径

直线代价 1，斜线代价 √2，二叉堆作为优先队列。
"""

import heapq
import itertools
from typing import Dict, List, Optional, Tuple

from loguru import logger

from gridnav.path_planner.grid_model import (
    GridLike,
    Point,
    as_grid,
    as_point,
    is_free,
    neighbors,
    point_key,
)
from gridnav.path_planner.map_model import PathResult
from gridnav.path_planner.path_utils import move_cost, reconstruct_path


def dijkstra(grid: GridLike, start: Point, goal: Point, allow_diagonal: bool = True) -> PathResult:
    """
    Dijkstra 路径搜索

    节点只有在以最小暂定距离出堆时才加入 visited（定稿）；
    堆中允许重复条目，出堆时已定稿的直接跳过。

    Args:
        grid: 栅格地图（0=可通行，1=障碍）
        start: 起点 (x, y)
        goal: 终点 (x, y)
        allow_diagonal: 是否允许斜线移动

    Returns:
        PathResult，无法到达时 path 为空
    """
    grid = as_grid(grid)
    start, goal = as_point(start), as_point(goal)

    logger.debug(f"[Dijkstra] 开始搜索: start={start}, goal={goal}, diagonal={allow_diagonal}")

    if start == goal:
        return PathResult(path=[start], visited={point_key(start)})

    if not is_free(grid, start):
        logger.warning(f"[Dijkstra] 起点越界或位于障碍物上: {start}")
        return PathResult()

    start_key = point_key(start)
    dist: Dict[str, float] = {start_key: 0.0}
    prev: Dict[str, Optional[str]] = {start_key: None}
    visited = set()

    # (距离, 序号, 点)，序号用于同距离时的稳定出堆
    counter = itertools.count()
    pq: List[Tuple[float, int, Point]] = [(0.0, next(counter), start)]

    while pq:
        d, _, cur = heapq.heappop(pq)
        k = point_key(cur)
        if k in visited:
            continue
        visited.add(k)
        if cur == goal:
            break
        for nb in neighbors(grid, cur, allow_diagonal):
            nk = point_key(nb)
            nd = d + move_cost(cur, nb)
            if nd < dist.get(nk, float('inf')):
                dist[nk] = nd
                prev[nk] = k
                heapq.heappush(pq, (nd, next(counter), nb))

    path = reconstruct_path(prev, start, goal)
    if path:
        logger.info(
            f"[Dijkstra] 路径规划成功: 路径长度={len(path)}, 代价={dist[point_key(goal)]:.3f}, "
            f"访问节点数={len(visited)}"
        )
    else:
        logger.warning(f"[Dijkstra] 无法找到路径: start={start}, goal={goal}, 访问节点数={len(visited)}")
    return PathResult(path=path, visited=visited)
