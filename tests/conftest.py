#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
测试公共夹具
"""

import numpy as np
import pytest
from loguru import logger

from gridnav.path_planner.grid_model import make_grid


@pytest.fixture(autouse=True)
def quiet_logger():
    """测试期间只保留 WARNING 以上的日志"""
    logger.remove()
    logger.add(lambda msg: None, level="WARNING")
    yield
    logger.remove()


@pytest.fixture
def open_grid() -> np.ndarray:
    """5x5 全可通行"""
    return make_grid([[0] * 5 for _ in range(5)])


@pytest.fixture
def center_blocked_grid() -> np.ndarray:
    """3x3，中心 (1,1) 为障碍"""
    return make_grid([
        [0, 0, 0],
        [0, 1, 0],
        [0, 0, 0],
    ])


@pytest.fixture
def walled_grid() -> np.ndarray:
    """7x5，x=3 整列为墙，左右两个区域互不连通"""
    grid = np.zeros((5, 7), dtype=np.uint8)
    grid[:, 3] = 1
    return grid
