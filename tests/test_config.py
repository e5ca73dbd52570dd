#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置模型与加载器测试
"""

from pathlib import Path

import pytest
import yaml
from loguru import logger

from gridnav.common import constants
from gridnav.common.exceptions import ConfigurationError
from gridnav.config import GridNavConfig, PathPlanningConfig, RRTConfig, RRTStarConfig, load_config

REPO_CONFIG = Path(__file__).resolve().parent.parent / "config" / "config.yaml"


def test_defaults_match_constants():
    cfg = GridNavConfig()
    assert cfg.path_planning.algorithm == constants.DEFAULT_ALGORITHM
    assert cfg.path_planning.allow_diagonal is True
    assert cfg.path_planning.seed is None
    assert cfg.path_planning.rrt.max_iterations == constants.RRT_MAX_ITERATIONS
    assert cfg.path_planning.rrt.goal_bias == constants.RRT_GOAL_BIAS
    assert cfg.path_planning.rrt_star.max_iterations == constants.RRT_STAR_MAX_ITERATIONS
    assert cfg.path_planning.rrt_star.goal_bias == constants.RRT_STAR_GOAL_BIAS
    assert cfg.path_planning.rrt_star.rewire_radius == constants.RRT_STAR_REWIRE_RADIUS
    assert cfg.logging.level == "INFO"
    assert cfg.logging.log_dir is None


def test_algorithm_is_normalised():
    assert PathPlanningConfig(algorithm="JPS").algorithm == "jps"


@pytest.mark.parametrize("kwargs", [
    {"max_iterations": 0},
    {"goal_bias": 1.5},
    {"goal_bias": -0.1},
    {"step_size": 0},
    {"goal_radius": -1},
])
def test_rrt_validation(kwargs):
    with pytest.raises(ValueError):
        RRTConfig(**kwargs)


def test_rrt_star_validation():
    with pytest.raises(ValueError):
        RRTStarConfig(rewire_radius=0)


def test_unknown_algorithm_rejected():
    with pytest.raises(ValueError):
        PathPlanningConfig(algorithm="dfs")


def test_repo_config_loads():
    cfg = load_config(REPO_CONFIG)
    assert cfg == GridNavConfig()


def test_load_config(tmp_path):
    path = tmp_path / "gridnav.yaml"
    path.write_text(yaml.safe_dump({
        "path_planning": {
            "algorithm": "RRT_STAR",
            "seed": 3,
            "rrt_star": {"max_iterations": 50, "rewire_radius": 6.0},
        },
        "logging": {"level": "debug", "log_dir": "Logs"},
    }), encoding="utf-8")

    cfg = load_config(path)
    assert cfg.path_planning.algorithm == "rrt_star"
    assert cfg.path_planning.seed == 3
    assert cfg.path_planning.rrt_star.max_iterations == 50
    assert cfg.path_planning.rrt_star.rewire_radius == 6.0
    assert cfg.path_planning.rrt_star.step_size == constants.RRT_STAR_STEP_SIZE
    assert cfg.logging.level == "DEBUG"
    assert Path(cfg.logging.log_dir) == (tmp_path / "Logs").resolve()


def test_load_config_base_dir(tmp_path):
    path = tmp_path / "gridnav.yaml"
    path.write_text("logging:\n  log_dir: out\n", encoding="utf-8")
    other = tmp_path / "other"
    other.mkdir()
    cfg = load_config(path, base_dir=other)
    assert Path(cfg.logging.log_dir) == (other / "out").resolve()


def test_load_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_load_config_empty(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_not_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- astar\n- jps\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_load_config_invalid_values(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("path_planning:\n  rrt:\n    goal_bias: 2.0\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_load_config_bad_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("path_planning: [unclosed\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError):
        load_config(path)


def test_validation_errors_logged_per_field(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("path_planning:\n  rrt:\n    goal_bias: 2.0\n", encoding="utf-8")
    messages = []
    logger.add(lambda msg: messages.append(msg.record["message"]), level="ERROR")
    with pytest.raises(ConfigurationError):
        load_config(path)
    assert any("path_planning -> rrt -> goal_bias" in m for m in messages)
