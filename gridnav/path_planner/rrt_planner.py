#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
采样规划器：RRT 与 RRT*

功能：
- 目标偏置的随机采样 + 最近节点扩展
- 线段碰撞检测（单位步长采样）
- RRT* 额外维护代价、选择最优父节点并做 rewire
- 路径回溯后在树节点之间插值，输出稠密的格子序列
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from loguru import logger

from gridnav.common.constants import (
    RRT_GOAL_BIAS,
    RRT_GOAL_RADIUS,
    RRT_MAX_ITERATIONS,
    RRT_STAR_GOAL_BIAS,
    RRT_STAR_GOAL_RADIUS,
    RRT_STAR_MAX_ITERATIONS,
    RRT_STAR_REWIRE_RADIUS,
    RRT_STAR_STEP_SIZE,
    RRT_STEP_SIZE,
)
from gridnav.path_planner.grid_model import GridLike, Point, as_grid, as_point, is_free, point_key
from gridnav.path_planner.map_model import PathResult
from gridnav.path_planner.path_utils import densify, distance, extend, is_path_clear


@dataclass
class TreeNode:
    """搜索树节点：parent 为树数组下标，根节点为 None"""
    point: Point
    parent: Optional[int]
    cost: float = 0.0


def _sample(rng, grid: np.ndarray, goal: Point, goal_bias: float) -> Point:
    """目标偏置采样：以 goal_bias 概率返回终点，否则在栅格范围内均匀采样（不保证可通行）"""
    if rng.random() < goal_bias:
        return goal
    height, width = grid.shape[:2]
    x = int(rng.integers(0, width))
    y = int(rng.integers(0, height))
    return (x, y)


def _nearest(tree: List[TreeNode], p: Point) -> int:
    """欧氏距离最近的树节点下标（距离相同取先加入的）"""
    return min(range(len(tree)), key=lambda j: distance(tree[j].point, p))


def _try_connect_goal(
    grid: np.ndarray,
    tree: List[TreeNode],
    idx: int,
    goal: Point,
    goal_radius: float,
) -> Optional[int]:
    """
    新节点进入目标半径后尝试直连终点

    Returns:
        终点节点下标，无法连接返回 None
    """
    node = tree[idx]
    if node.point == goal:
        return idx
    d = distance(node.point, goal)
    if d > goal_radius or not is_path_clear(grid, node.point, goal):
        return None
    tree.append(TreeNode(goal, idx, node.cost + d))
    return len(tree) - 1


def _reconstruct_tree_path(tree: List[TreeNode], idx: int) -> List[Point]:
    """沿父节点回溯并在关键节点之间插值"""
    key_points: List[Point] = []
    current: Optional[int] = idx
    while current is not None:
        key_points.append(tree[current].point)
        current = tree[current].parent
    key_points.reverse()
    return densify(key_points)


def _propagate_cost(tree: List[TreeNode], idx: int, delta: float) -> None:
    """rewire 后把代价下降量传递给所有子孙节点"""
    stack = [idx]
    while stack:
        parent = stack.pop()
        for j, node in enumerate(tree):
            if node.parent == parent:
                node.cost -= delta
                stack.append(j)


def _insert_with_rewire(
    grid: np.ndarray,
    tree: List[TreeNode],
    new_point: Point,
    nearest_idx: int,
    rewire_radius: float,
) -> Tuple[int, int]:
    """
    RRT* 插入新节点：选最优父节点，然后 rewire 邻近节点

    Args:
        grid: 栅格
        tree: 搜索树（原地修改）
        new_point: 已通过碰撞检测的新点
        nearest_idx: 扩展所用的最近节点
        rewire_radius: 邻域半径

    Returns:
        (新节点下标, rewire 次数)
    """
    nearest = tree[nearest_idx].point
    near_nodes = [j for j, node in enumerate(tree) if distance(node.point, new_point) <= rewire_radius]

    # 选择最优父节点
    best_parent = nearest_idx
    min_cost = tree[nearest_idx].cost + distance(nearest, new_point)
    for j in near_nodes:
        node = tree[j]
        new_cost = node.cost + distance(node.point, new_point)
        if new_cost < min_cost and is_path_clear(grid, node.point, new_point):
            best_parent = j
            min_cost = new_cost

    new_idx = len(tree)
    tree.append(TreeNode(new_point, best_parent, min_cost))

    # Rewire
    rewired = 0
    for j in near_nodes:
        if j == best_parent:
            continue
        node = tree[j]
        new_cost = min_cost + distance(new_point, node.point)
        if new_cost < node.cost and is_path_clear(grid, new_point, node.point):
            delta = node.cost - new_cost
            node.parent = new_idx
            node.cost = new_cost
            _propagate_cost(tree, j, delta)
            rewired += 1

    return new_idx, rewired


def rrt(
    grid: GridLike,
    start: Point,
    goal: Point,
    max_iterations: int = RRT_MAX_ITERATIONS,
    goal_bias: float = RRT_GOAL_BIAS,
    step_size: float = RRT_STEP_SIZE,
    goal_radius: float = RRT_GOAL_RADIUS,
    rng=None,
) -> PathResult:
    """
    RRT 路径搜索

    Args:
        grid: 栅格地图（0=可通行，1=障碍）
        start: 起点
        goal: 终点
        max_iterations: 最大迭代次数
        goal_bias: 直接采样终点的概率
        step_size: 扩展步长
        goal_radius: 到达判定半径
        rng: 随机数源，需提供 random() 与 integers(low, high)；默认 np.random.default_rng()

    Returns:
        PathResult，visited 为加入树的所有点
    """
    grid = as_grid(grid)
    start, goal = as_point(start), as_point(goal)
    rng = rng if rng is not None else np.random.default_rng()

    logger.debug(f"[RRT] 开始搜索: start={start}, goal={goal}, max_iterations={max_iterations}")

    if start == goal:
        return PathResult(path=[start], visited={point_key(start)})

    if not is_free(grid, start):
        logger.warning(f"[RRT] 起点越界或位于障碍物上: {start}")
        return PathResult()

    visited = {point_key(start)}

    tree: List[TreeNode] = [TreeNode(start, None)]

    for i in range(max_iterations):
        sample = _sample(rng, grid, goal, goal_bias)
        nearest_idx = _nearest(tree, sample)
        nearest = tree[nearest_idx].point
        new_point = extend(nearest, sample, step_size)

        if point_key(new_point) in visited:
            continue
        if not is_free(grid, new_point) or not is_path_clear(grid, nearest, new_point):
            continue

        tree.append(TreeNode(new_point, nearest_idx))
        visited.add(point_key(new_point))

        goal_idx = _try_connect_goal(grid, tree, len(tree) - 1, goal, goal_radius)
        if goal_idx is not None:
            visited.add(point_key(goal))
            path = _reconstruct_tree_path(tree, goal_idx)
            logger.info(f"[RRT] 路径规划成功: 迭代={i + 1}, 树节点数={len(tree)}, 路径长度={len(path)}")
            return PathResult(path=path, visited=visited)

    logger.warning(f"[RRT] {max_iterations} 次迭代内未找到路径: start={start}, goal={goal}, 树节点数={len(tree)}")
    return PathResult(path=[], visited=visited)


def rrt_star(
    grid: GridLike,
    start: Point,
    goal: Point,
    max_iterations: int = RRT_STAR_MAX_ITERATIONS,
    goal_bias: float = RRT_STAR_GOAL_BIAS,
    step_size: float = RRT_STAR_STEP_SIZE,
    goal_radius: float = RRT_STAR_GOAL_RADIUS,
    rewire_radius: float = RRT_STAR_REWIRE_RADIUS,
    rng=None,
) -> PathResult:
    """
    RRT* 路径搜索

    扩展方式与 RRT 相同；新点加入时在 rewire_radius 内选择
    cost + distance 最小且无碰撞的父节点，随后对邻近节点做 rewire：
    经新节点可严格降低代价且无碰撞时改换父节点。

    Args:
        grid: 栅格地图（0=可通行，1=障碍）
        start: 起点
        goal: 终点
        max_iterations: 最大迭代次数
        goal_bias: 直接采样终点的概率
        step_size: 扩展步长
        goal_radius: 到达判定半径
        rewire_radius: 选父 / rewire 的邻域半径
        rng: 随机数源，默认 np.random.default_rng()

    Returns:
        PathResult
    """
    grid = as_grid(grid)
    start, goal = as_point(start), as_point(goal)
    rng = rng if rng is not None else np.random.default_rng()

    logger.debug(f"[RRT*] 开始搜索: start={start}, goal={goal}, max_iterations={max_iterations}")

    if start == goal:
        return PathResult(path=[start], visited={point_key(start)})

    if not is_free(grid, start):
        logger.warning(f"[RRT*] 起点越界或位于障碍物上: {start}")
        return PathResult()

    visited = {point_key(start)}

    tree: List[TreeNode] = [TreeNode(start, None, 0.0)]
    rewire_count = 0

    for i in range(max_iterations):
        sample = _sample(rng, grid, goal, goal_bias)
        nearest_idx = _nearest(tree, sample)
        nearest = tree[nearest_idx].point
        new_point = extend(nearest, sample, step_size)

        if point_key(new_point) in visited:
            continue
        if not is_free(grid, new_point) or not is_path_clear(grid, nearest, new_point):
            continue

        new_idx, rewired = _insert_with_rewire(grid, tree, new_point, nearest_idx, rewire_radius)
        visited.add(point_key(new_point))
        rewire_count += rewired

        goal_idx = _try_connect_goal(grid, tree, new_idx, goal, goal_radius)
        if goal_idx is not None:
            visited.add(point_key(goal))
            path = _reconstruct_tree_path(tree, goal_idx)
            logger.info(
                f"[RRT*] 路径规划成功: 迭代={i + 1}, 树节点数={len(tree)}, rewire次数={rewire_count}, "
                f"路径代价={tree[goal_idx].cost:.3f}, 路径长度={len(path)}"
            )
            return PathResult(path=path, visited=visited)

    logger.warning(f"[RRT*] {max_iterations} 次迭代内未找到路径: start={start}, goal={goal}, 树节点数={len(tree)}")
    return PathResult(path=[], visited=visited)
