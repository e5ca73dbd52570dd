#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径规划模块

所有算法签名一致：search(grid, start, goal, ...) -> PathResult(path, visited)
"""

from .grid_model import (
    Point,
    create_grid,
    make_grid,
    in_bounds,
    is_free,
    neighbors,
    point_key,
)
from .map_model import PathResult, MapModel, PlanRequest, PlanResult
from .bfs_planner import bfs
from .dijkstra_planner import dijkstra
from .astar_planner import astar
from .rrt_planner import rrt, rrt_star
from .jps_planner import jps
from .path_planner_core import ALGORITHMS, PathPlanningCore, search

__all__ = [
    'Point',
    'create_grid',
    'make_grid',
    'in_bounds',
    'is_free',
    'neighbors',
    'point_key',
    'PathResult',
    'MapModel',
    'PlanRequest',
    'PlanResult',
    'bfs',
    'dijkstra',
    'astar',
    'rrt',
    'rrt_star',
    'jps',
    'ALGORITHMS',
    'PathPlanningCore',
    'search',
]
