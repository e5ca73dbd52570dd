#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
广度优先搜索（BFS）

所有边权为 1，按层遍历，首次访问即最短步数。
"""

from collections import deque
from typing import Dict, Optional

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
from gridnav.path_planner.path_utils import reconstruct_path


def bfs(grid: GridLike, start: Point, goal: Point, allow_diagonal: bool = True) -> PathResult:
    """
    BFS 路径搜索

    入队时即标记 visited，每个节点最多入队一次；终点出队时提前结束。

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

    logger.debug(f"[BFS] 开始搜索: start={start}, goal={goal}, diagonal={allow_diagonal}")

    if start == goal:
        return PathResult(path=[start], visited={point_key(start)})

    if not is_free(grid, start):
        logger.warning(f"[BFS] 起点越界或位于障碍物上: {start}")
        return PathResult()

    queue = deque([start])
    prev: Dict[str, Optional[str]] = {point_key(start): None}
    visited = {point_key(start)}

    while queue:
        cur = queue.popleft()
        if cur == goal:
            break
        cur_key = point_key(cur)
        for nb in neighbors(grid, cur, allow_diagonal):
            k = point_key(nb)
            if k not in visited:
                visited.add(k)
                prev[k] = cur_key
                queue.append(nb)

    path = reconstruct_path(prev, start, goal)
    if path:
        logger.info(f"[BFS] 路径规划成功: 路径长度={len(path)}, 访问节点数={len(visited)}")
    else:
        logger.warning(f"[BFS] 无法找到路径: start={start}, goal={goal}, 访问节点数={len(visited)}")
    return PathResult(path=path, visited=visited)
