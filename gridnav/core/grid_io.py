#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
栅格读写模块

封装栅格文件加载（文本 / npy / 掩码图片）与 ASCII 可视化。
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import cv2
import numpy as np
from loguru import logger

from gridnav.common.constants import BLOCKED, FREE
from gridnav.common.exceptions import GridFormatError
from gridnav.path_planner.grid_model import Point, make_grid, parse_key

FREE_CHARS = frozenset(".0")
BLOCKED_CHARS = frozenset("#1X")
START_CHAR = "S"
GOAL_CHAR = "G"

IMAGE_SUFFIXES = frozenset({".png", ".bmp", ".jpg", ".jpeg"})


@dataclass
class GridData:
    """栅格数据"""
    grid: np.ndarray         # 0=可通行，1=障碍
    start: Optional[Point]   # 文本中 S 标记的位置
    goal: Optional[Point]    # 文本中 G 标记的位置


def _split_cells(line: str) -> List[str]:
    """带分隔符（空格 / 逗号）时按分隔符切分，否则每个字符一个格子"""
    if "," in line or " " in line.strip():
        return [c for c in line.replace(",", " ").split() if c]
    return list(line.strip())


def parse_grid_text(text: str) -> GridData:
    """
    解析文本栅格

    '.' / '0' 为可通行，'#' / '1' / 'X' 为障碍，'S' / 'G' 为起点 / 终点（可通行）。

    Raises:
        GridFormatError: 未知字符、行长度不一致、空栅格或重复的 S/G
    """
    rows: List[List[int]] = []
    start: Optional[Point] = None
    goal: Optional[Point] = None

    for line in text.splitlines():
        if not line.strip():
            continue
        y = len(rows)
        row: List[int] = []
        for x, cell in enumerate(_split_cells(line)):
            if cell in FREE_CHARS:
                row.append(FREE)
            elif cell in BLOCKED_CHARS:
                row.append(BLOCKED)
            elif cell in (START_CHAR, GOAL_CHAR):
                if cell == START_CHAR:
                    if start is not None:
                        raise GridFormatError(f"重复的起点标记: {start} 和 {(x, y)}")
                    start = (x, y)
                else:
                    if goal is not None:
                        raise GridFormatError(f"重复的终点标记: {goal} 和 {(x, y)}")
                    goal = (x, y)
                row.append(FREE)
            else:
                raise GridFormatError(f"未知的栅格字符 {cell!r}: 行={y}, 列={x}")
        rows.append(row)

    return GridData(grid=make_grid(rows), start=start, goal=goal)


def _load_mask_image(path: Path) -> np.ndarray:
    """掩码图片：白色为可通行，黑色（<127）为障碍"""
    mask = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
    if mask is None:
        raise GridFormatError(f"无法读取掩码文件: {path}")
    return np.where(mask < 127, BLOCKED, FREE).astype(np.uint8)


def load_grid(path: Union[str, Path]) -> GridData:
    """
    加载栅格文件（按扩展名分发）

    Args:
        path: .txt 文本栅格、.npy 数组或掩码图片

    Returns:
        GridData；只有文本栅格可能带起点 / 终点

    Raises:
        FileNotFoundError: 文件不存在
        GridFormatError: 内容无法解析
    """
    path = Path(path)
    if not path.exists():
        error_msg = f"栅格文件不存在: {path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    suffix = path.suffix.lower()
    if suffix == ".npy":
        try:
            arr = np.load(path, allow_pickle=False)
        except ValueError as e:
            raise GridFormatError(f"无法读取npy文件: {path}: {e}") from e
        data = GridData(grid=make_grid(arr), start=None, goal=None)
    elif suffix in IMAGE_SUFFIXES:
        data = GridData(grid=make_grid(_load_mask_image(path)), start=None, goal=None)
    else:
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise GridFormatError(f"栅格文件不是UTF-8文本: {path}: {e}") from e
        data = parse_grid_text(text)

    h, w = data.grid.shape
    logger.info(f"加载栅格: {path}, 尺寸=({w}, {h}), 障碍数={int(data.grid.sum())}")
    return data


def render_ascii(
    grid: np.ndarray,
    path: Sequence[Point] = (),
    visited: Iterable[str] = (),
    start: Optional[Point] = None,
    goal: Optional[Point] = None,
) -> str:
    """
    ASCII 可视化

    '#' = 障碍, '.' = 空地, '+' = 已访问, '*' = 路径, 'S' = 起点, 'G' = 终点
    """
    h, w = grid.shape[:2]
    vis = np.where(np.asarray(grid) != 0, '#', '.').astype('<U1')

    def mark(p: Tuple[int, int], ch: str) -> None:
        x, y = p
        if 0 <= x < w and 0 <= y < h:
            vis[y, x] = ch

    for key in visited:
        mark(parse_key(key), '+')
    for p in path:
        mark(p, '*')
    if start is not None:
        mark(start, 'S')
    if goal is not None:
        mark(goal, 'G')

    return "\n".join("".join(row) for row in vis)
