#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
栅格读写测试
"""

import cv2
import numpy as np
import pytest

from gridnav.common.exceptions import GridFormatError
from gridnav.core.grid_io import load_grid, parse_grid_text, render_ascii

MAZE = """
S..#
.#.#
...G
"""


def test_parse_grid_text():
    data = parse_grid_text(MAZE)
    assert data.grid.tolist() == [
        [0, 0, 0, 1],
        [0, 1, 0, 1],
        [0, 0, 0, 0],
    ]
    assert data.start == (0, 0)
    assert data.goal == (3, 2)


def test_parse_separated_values():
    data = parse_grid_text("0,1,0\n0,0,0\n")
    assert data.grid.tolist() == [[0, 1, 0], [0, 0, 0]]
    data = parse_grid_text("0 1 X\nS 0 G\n")
    assert data.grid.tolist() == [[0, 1, 1], [0, 0, 0]]
    assert data.start == (0, 1)
    assert data.goal == (2, 1)


@pytest.mark.parametrize("text", [
    "S.S\n...",
    "G..\n..G",
    "..?\n...",
    "...\n..",
    "",
])
def test_parse_rejects_bad_text(text):
    with pytest.raises(GridFormatError):
        parse_grid_text(text)


def test_load_text(tmp_path):
    path = tmp_path / "maze.txt"
    path.write_text(MAZE, encoding="utf-8")
    data = load_grid(path)
    assert data.grid.shape == (3, 4)
    assert data.start == (0, 0)


def test_load_npy(tmp_path):
    path = tmp_path / "grid.npy"
    np.save(path, np.array([[0, 3], [0, 0]], dtype=np.int32))
    data = load_grid(path)
    assert data.grid.tolist() == [[0, 1], [0, 0]]
    assert data.start is None and data.goal is None


def test_load_mask_image(tmp_path):
    path = tmp_path / "mask.png"
    mask = np.full((4, 5), 255, dtype=np.uint8)
    mask[1, 2] = 0
    assert cv2.imwrite(str(path), mask)
    data = load_grid(path)
    assert data.grid.shape == (4, 5)
    assert data.grid[1, 2] == 1
    assert int(data.grid.sum()) == 1


def test_load_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_grid(tmp_path / "nope.txt")


def test_load_unreadable_image(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")
    with pytest.raises(GridFormatError):
        load_grid(path)


def test_render_ascii():
    grid = np.array([
        [0, 0, 1],
        [0, 0, 0],
    ], dtype=np.uint8)
    text = render_ascii(grid, path=[(0, 0), (1, 1), (2, 1)], visited={"0,0", "1,0", "1,1"},
                        start=(0, 0), goal=(2, 1))
    assert text == "S+#\n.*G"


def test_render_plain_grid():
    assert render_ascii(np.array([[1, 0]], dtype=np.uint8)) == "#."


def test_load_text_not_utf8(tmp_path):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"S.\xff\n..G\n")
    with pytest.raises(GridFormatError):
        load_grid(path)
