# gridnav/path_planner/path_planner_core.py
from typing import Callable, Dict, Optional

import numpy as np
from loguru import logger

from gridnav.common.constants import DEFAULT_ALGORITHM, STATS_LOG_INTERVAL
from gridnav.common.exceptions import ConfigurationError
from gridnav.config.models import PathPlanningConfig
from gridnav.path_planner.astar_planner import astar
from gridnav.path_planner.bfs_planner import bfs
from gridnav.path_planner.dijkstra_planner import dijkstra
from gridnav.path_planner.grid_model import GridLike, Point
from gridnav.path_planner.jps_planner import jps
from gridnav.path_planner.map_model import MapModel, PathResult, PlanRequest, PlanResult
from gridnav.path_planner.path_utils import path_cost
from gridnav.path_planner.rrt_planner import rrt, rrt_star

ALGORITHMS: Dict[str, Callable[..., PathResult]] = {
    "bfs": bfs,
    "dijkstra": dijkstra,
    "astar": astar,
    "rrt": rrt,
    "rrt_star": rrt_star,
    "jps": jps,
}

# 支持斜线开关的算法；RRT / RRT* 天然任意方向，JPS 总是允许斜线
DIAGONAL_AWARE = frozenset({"bfs", "dijkstra", "astar"})


def search(
    grid: GridLike,
    start: Point,
    goal: Point,
    algorithm: str = DEFAULT_ALGORITHM,
    allow_diagonal: bool = True,
    rng=None,
    config: Optional[PathPlanningConfig] = None,
) -> PathResult:
    """
    统一入口：按算法名分发

    Args:
        grid: 栅格地图
        start: 起点 (x, y)
        goal: 终点 (x, y)
        algorithm: 算法名，见 ALGORITHMS
        allow_diagonal: 是否允许斜线（仅 bfs / dijkstra / astar 生效）
        rng: RRT / RRT* 使用的随机数源
        config: 采样规划器参数，None 时使用默认值

    Raises:
        ConfigurationError: 未知算法
    """
    fn = ALGORITHMS.get(algorithm)
    if fn is None:
        raise ConfigurationError(f"未知的路径规划算法: {algorithm}，可选: {sorted(ALGORITHMS)}")

    if algorithm in DIAGONAL_AWARE:
        return fn(grid, start, goal, allow_diagonal)
    if algorithm == "jps":
        return fn(grid, start, goal)

    cfg = config or PathPlanningConfig()
    if algorithm == "rrt":
        return fn(grid, start, goal, rng=rng, **cfg.rrt.model_dump())
    return fn(grid, start, goal, rng=rng, **cfg.rrt_star.model_dump())


class PathPlanningCore:
    """纯路径规划器：只关心栅格，不关心渲染 / 动画回放。"""

    def __init__(self, config: Optional[PathPlanningConfig] = None) -> None:
        self._config = config or PathPlanningConfig()
        self._rng = np.random.default_rng(self._config.seed)

        # 统计计数器
        self._plan_count: int = 0
        self._success_count: int = 0
        self._failure_count: int = 0
        self._error_count: int = 0

    @property
    def config(self) -> PathPlanningConfig:
        return self._config

    @property
    def stats(self) -> Dict[str, int]:
        return {
            "plans": self._plan_count,
            "success": self._success_count,
            "failure": self._failure_count,
            "error": self._error_count,
        }

    def _log_stats(self) -> None:
        """每 STATS_LOG_INTERVAL 次规划打印一次统计"""
        if self._plan_count % STATS_LOG_INTERVAL != 0:
            return
        logger.info(
            f"路径规划统计 (共{self._plan_count}次): 成功={self._success_count}, "
            f"失败={self._failure_count}, 异常={self._error_count}"
        )

    def plan(self, map_model: MapModel, req: PlanRequest) -> PlanResult:
        """在给定地图上做一次路径规划（栅格坐标），不抛异常。"""
        algorithm = req.algorithm or self._config.algorithm
        allow_diagonal = self._config.allow_diagonal if req.allow_diagonal is None else req.allow_diagonal
        self._plan_count += 1

        try:
            result = search(
                map_model.grid,
                req.start,
                req.goal,
                algorithm=algorithm,
                allow_diagonal=allow_diagonal,
                rng=self._rng,
                config=self._config,
            )
        except Exception as e:
            self._error_count += 1
            logger.error(f"PathPlanningCore 规划异常: algorithm={algorithm}, {e}")
            self._log_stats()
            return PlanResult(ok=False, path=[], reason=str(e))

        if not result.path:
            self._failure_count += 1
            self._log_stats()
            return PlanResult(ok=False, path=[], visited=result.visited, reason=f"{algorithm} 未找到路径")

        self._success_count += 1
        self._log_stats()
        return PlanResult(
            ok=True,
            path=result.path,
            visited=result.visited,
            cost=path_cost(result.path),
            reason="ok",
        )
