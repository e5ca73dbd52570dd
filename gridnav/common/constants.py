#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
常量定义：集中管理所有魔法数字和默认参数
"""

import math

# =============================
# 栅格相关常量
# =============================

FREE: int = 0
BLOCKED: int = 1

# 四方向移动
DIRECTIONS_4WAY = [(1, 0), (-1, 0), (0, 1), (0, -1)]

# 斜线方向
DIRECTIONS_DIAGONAL = [(1, 1), (1, -1), (-1, 1), (-1, -1)]

# 八方向移动（直线在前）
DIRECTIONS_8WAY = DIRECTIONS_4WAY + DIRECTIONS_DIAGONAL

# 移动代价
ORTHOGONAL_COST: float = 1.0
DIAGONAL_COST: float = math.sqrt(2)

# =============================
# 采样规划器默认参数
# =============================

RRT_MAX_ITERATIONS: int = 1000
RRT_GOAL_BIAS: float = 0.1
RRT_STEP_SIZE: float = 2.0
RRT_GOAL_RADIUS: float = 3.0

RRT_STAR_MAX_ITERATIONS: int = 800
RRT_STAR_GOAL_BIAS: float = 0.15
RRT_STAR_STEP_SIZE: float = 2.0
RRT_STAR_GOAL_RADIUS: float = 3.0
RRT_STAR_REWIRE_RADIUS: float = 4.0

# =============================
# 规划核心
# =============================

ALGORITHM_NAMES = ("bfs", "dijkstra", "astar", "rrt", "rrt_star", "jps")

DEFAULT_ALGORITHM: str = "astar"

# 每隔多少次规划打印一次统计
STATS_LOG_INTERVAL: int = 10
