#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径规划配置模型

使用Pydantic定义类型安全的配置模型，默认值与各算法的内置常量一致。
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from gridnav.common.constants import (
    ALGORITHM_NAMES,
    DEFAULT_ALGORITHM,
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


class RRTConfig(BaseModel):
    """RRT 采样参数"""
    max_iterations: int = Field(RRT_MAX_ITERATIONS, description="最大迭代次数")
    goal_bias: float = Field(RRT_GOAL_BIAS, description="直接采样终点的概率")
    step_size: float = Field(RRT_STEP_SIZE, description="扩展步长（栅格单位）")
    goal_radius: float = Field(RRT_GOAL_RADIUS, description="到达判定半径（栅格单位）")

    @field_validator('max_iterations')
    @classmethod
    def validate_max_iterations(cls, v: int) -> int:
        """验证迭代次数"""
        if v <= 0:
            raise ValueError(f"迭代次数必须大于0: {v}")
        return v

    @field_validator('goal_bias')
    @classmethod
    def validate_goal_bias(cls, v: float) -> float:
        """验证目标偏置范围"""
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"目标偏置必须在0.0-1.0之间: {v}")
        return v

    @field_validator('step_size', 'goal_radius')
    @classmethod
    def validate_positive_float(cls, v: float) -> float:
        """验证正浮点数"""
        if v <= 0:
            raise ValueError(f"值必须大于0: {v}")
        return v


class RRTStarConfig(RRTConfig):
    """RRT* 采样参数"""
    max_iterations: int = Field(RRT_STAR_MAX_ITERATIONS, description="最大迭代次数")
    goal_bias: float = Field(RRT_STAR_GOAL_BIAS, description="直接采样终点的概率")
    step_size: float = Field(RRT_STAR_STEP_SIZE, description="扩展步长（栅格单位）")
    goal_radius: float = Field(RRT_STAR_GOAL_RADIUS, description="到达判定半径（栅格单位）")
    rewire_radius: float = Field(RRT_STAR_REWIRE_RADIUS, description="选父节点 / rewire 邻域半径")

    @field_validator('rewire_radius')
    @classmethod
    def validate_rewire_radius(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"rewire半径必须大于0: {v}")
        return v


class PathPlanningConfig(BaseModel):
    """路径规划配置"""
    algorithm: str = Field(DEFAULT_ALGORITHM, description="默认算法: bfs / dijkstra / astar / rrt / rrt_star / jps")
    allow_diagonal: bool = Field(True, description="是否允许斜线移动（bfs / dijkstra / astar）")
    seed: Optional[int] = Field(None, description="RRT / RRT* 随机种子，None 表示不固定")
    rrt: RRTConfig = Field(default_factory=RRTConfig, description="RRT 参数")
    rrt_star: RRTStarConfig = Field(default_factory=RRTStarConfig, description="RRT* 参数")

    @field_validator('algorithm')
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        """验证算法名"""
        v = v.lower()
        if v not in ALGORITHM_NAMES:
            raise ValueError(f"算法必须是 {', '.join(ALGORITHM_NAMES)} 之一: {v}")
        return v


class LoggingConfig(BaseModel):
    """日志配置"""
    level: str = Field("INFO", description="日志级别")
    log_dir: Optional[str] = Field(None, description="日志目录，None 表示只输出到控制台")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"未知的日志级别: {v}")
        return v


class GridNavConfig(BaseModel):
    """主配置"""
    path_planning: PathPlanningConfig = Field(default_factory=PathPlanningConfig, description="路径规划配置")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="日志配置")
