#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
gridnav 主包

栅格路径规划库：BFS / Dijkstra / A* / RRT / RRT* / JPS，
所有算法统一返回 (path, visited)。
"""

__version__ = "0.1.0"

from .path_planner import (
    PathResult,
    bfs,
    dijkstra,
    astar,
    rrt,
    rrt_star,
    jps,
    search,
    ALGORITHMS,
)

__all__ = [
    'PathResult',
    'bfs',
    'dijkstra',
    'astar',
    'rrt',
    'rrt_star',
    'jps',
    'search',
    'ALGORITHMS',
]
