#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
命令行路径规划

从栅格文件读取地图，运行指定算法，输出 ASCII 地图与统计信息。

示例:
    gridnav-plan --grid maze.txt --algorithm jps
    gridnav-plan --grid mask.png --start 0,0 --goal 63,63 --algorithm rrt_star --seed 7
"""

import argparse
import sys
from typing import List, Optional

import yaml
from loguru import logger

from gridnav.common.constants import ALGORITHM_NAMES
from gridnav.common.exceptions import GridNavError
from gridnav.config.loader import load_config
from gridnav.config.models import GridNavConfig
from gridnav.core.grid_io import load_grid, render_ascii
from gridnav.path_planner.grid_model import Point
from gridnav.path_planner.map_model import MapModel, PlanRequest
from gridnav.path_planner.path_planner_core import PathPlanningCore
from gridnav.utils.logger import SetupLogger

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_INPUT_ERROR = 2


def _parse_point(text: str) -> Point:
    """解析 "x,y" 形式的坐标"""
    try:
        x, y = text.split(",")
        return (int(x), int(y))
    except ValueError:
        raise argparse.ArgumentTypeError(f"坐标格式应为 x,y: {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="栅格路径规划（BFS / Dijkstra / A* / RRT / RRT* / JPS）")
    parser.add_argument("--grid", type=str, required=True, help="栅格文件：.txt / .npy / 掩码图片")
    parser.add_argument("--algorithm", type=str, choices=ALGORITHM_NAMES, default=None, help="算法（默认取配置）")
    parser.add_argument("--start", type=_parse_point, default=None, help="起点 x,y（默认取文本栅格中的 S）")
    parser.add_argument("--goal", type=_parse_point, default=None, help="终点 x,y（默认取文本栅格中的 G）")
    parser.add_argument("--no-diagonal", action="store_true", help="禁止斜线移动（bfs / dijkstra / astar）")
    parser.add_argument("--seed", type=int, default=None, help="RRT / RRT* 随机种子")
    parser.add_argument("--config", type=str, default=None, help="YAML 配置文件")
    parser.add_argument("--log-level", type=str, default=None, help="日志级别（默认取配置）")
    parser.add_argument("--no-render", action="store_true", help="不输出 ASCII 地图")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config) if args.config else GridNavConfig()
    except (FileNotFoundError, ValueError, yaml.YAMLError, GridNavError) as e:
        print(f"[错误] 配置加载失败: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    SetupLogger(level=(args.log_level or cfg.logging.level).upper(), log_dir=cfg.logging.log_dir)

    planning_cfg = cfg.path_planning
    if args.seed is not None:
        planning_cfg = planning_cfg.model_copy(update={"seed": args.seed})

    try:
        data = load_grid(args.grid)
    except (FileNotFoundError, GridNavError) as e:
        print(f"[错误] 栅格加载失败: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    start = args.start or data.start
    goal = args.goal or data.goal
    if start is None or goal is None:
        print("[错误] 未指定起点或终点（--start/--goal 或文本栅格中的 S/G）", file=sys.stderr)
        return EXIT_INPUT_ERROR

    core = PathPlanningCore(planning_cfg)
    request = PlanRequest(
        start=start,
        goal=goal,
        algorithm=args.algorithm,
        allow_diagonal=False if args.no_diagonal else None,
    )
    result = core.plan(MapModel.from_grid(data.grid), request)
    logger.debug(f"规划结果: ok={result.ok}, reason={result.reason}")

    if not args.no_render:
        print(render_ascii(data.grid, result.path, result.visited, start, goal))
        print()

    algorithm = args.algorithm or planning_cfg.algorithm
    if result.ok:
        print(f"{algorithm}: 路径长度={len(result.path)}, 代价={result.cost:.3f}, 访问节点数={len(result.visited)}")
        return EXIT_FOUND

    print(f"{algorithm}: 未找到路径 ({result.reason}), 访问节点数={len(result.visited)}")
    return EXIT_NOT_FOUND


if __name__ == "__main__":
    sys.exit(main())
