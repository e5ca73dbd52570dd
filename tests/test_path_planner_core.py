#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
统一入口 search 与 PathPlanningCore 测试
"""

import math

import numpy as np
import pytest

from gridnav.common.exceptions import ConfigurationError
from gridnav.config.models import PathPlanningConfig, RRTConfig
from gridnav.path_planner import ALGORITHMS, MapModel, PathPlanningCore, PlanRequest, search

from planner_helpers import ScriptedRng


@pytest.mark.parametrize("algorithm", sorted(ALGORITHMS))
def test_search_dispatch(algorithm, open_grid):
    result = search(open_grid, (0, 0), (4, 4), algorithm=algorithm, rng=np.random.default_rng(0))
    assert result.path[0] == (0, 0)
    assert result.path[-1] == (4, 4)


def test_search_unknown_algorithm(open_grid):
    with pytest.raises(ConfigurationError):
        search(open_grid, (0, 0), (4, 4), algorithm="dfs")


def test_search_diagonal_switch(open_grid):
    assert len(search(open_grid, (0, 0), (4, 4), algorithm="bfs", allow_diagonal=False).path) == 9
    # JPS 总是允许斜线
    assert len(search(open_grid, (0, 0), (4, 4), algorithm="jps", allow_diagonal=False).path) == 5


def test_search_passes_sampling_config():
    grid = np.zeros((10, 10), dtype=np.uint8)
    cfg = PathPlanningConfig(rrt=RRTConfig(max_iterations=1))
    result = search(grid, (0, 0), (8, 0), algorithm="rrt", rng=ScriptedRng(), config=cfg)
    assert result.path == []
    assert result.visited == {"0,0", "2,0"}


def test_core_plan_success(open_grid):
    core = PathPlanningCore()
    result = core.plan(MapModel.from_grid(open_grid), PlanRequest(start=(0, 0), goal=(4, 4)))
    assert result.ok
    assert result.reason == "ok"
    assert len(result.path) == 5
    assert result.cost == pytest.approx(4 * math.sqrt(2))
    assert "0,0" in result.visited
    assert core.stats == {"plans": 1, "success": 1, "failure": 0, "error": 0}


def test_core_uses_config_defaults(open_grid):
    core = PathPlanningCore(PathPlanningConfig(algorithm="jps"))
    result = core.plan(MapModel.from_grid(open_grid), PlanRequest(start=(0, 0), goal=(4, 4)))
    assert result.visited == {"0,0", "4,4"}

    core = PathPlanningCore(PathPlanningConfig(algorithm="bfs", allow_diagonal=False))
    result = core.plan(MapModel.from_grid(open_grid), PlanRequest(start=(0, 0), goal=(4, 4)))
    assert len(result.path) == 9

    # 请求中的参数优先于配置
    result = core.plan(
        MapModel.from_grid(open_grid),
        PlanRequest(start=(0, 0), goal=(4, 4), algorithm="astar", allow_diagonal=True),
    )
    assert len(result.path) == 5


def test_core_plan_failure(walled_grid):
    core = PathPlanningCore(PathPlanningConfig(algorithm="dijkstra"))
    result = core.plan(MapModel.from_grid(walled_grid), PlanRequest(start=(0, 0), goal=(6, 4)))
    assert not result.ok
    assert result.path == []
    assert len(result.visited) == 15
    assert "dijkstra" in result.reason
    assert core.stats["failure"] == 1


def test_core_plan_never_raises(open_grid):
    core = PathPlanningCore()
    result = core.plan(MapModel.from_grid(open_grid), PlanRequest(start=(0, 0), goal=(4, 4), algorithm="dfs"))
    assert not result.ok
    assert "dfs" in result.reason

    bad_map = MapModel(grid=None, size=(0, 0))
    result = core.plan(bad_map, PlanRequest(start=(0, 0), goal=(1, 1), algorithm="bfs"))
    assert not result.ok
    assert core.stats == {"plans": 2, "success": 0, "failure": 0, "error": 2}


def test_core_seed_is_reproducible():
    grid = np.zeros((20, 20), dtype=np.uint8)
    grid[5:15, 10] = 1
    req = PlanRequest(start=(0, 0), goal=(19, 19), algorithm="rrt_star")
    first = PathPlanningCore(PathPlanningConfig(seed=7)).plan(MapModel.from_grid(grid), req)
    second = PathPlanningCore(PathPlanningConfig(seed=7)).plan(MapModel.from_grid(grid), req)
    assert first.path == second.path
    assert first.visited == second.visited


def test_map_model_size():
    grid = np.zeros((3, 7), dtype=np.uint8)
    assert MapModel.from_grid(grid).size == (7, 3)
