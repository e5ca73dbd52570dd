#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置加载器

读取 YAML 配置，解析相对路径后交给 GridNavConfig 校验。
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from loguru import logger
from pydantic import ValidationError

from gridnav.common.exceptions import ConfigurationError
from gridnav.config.models import GridNavConfig


def load_config(config_path: Union[str, Path], base_dir: Optional[Path] = None) -> GridNavConfig:
    """
    从YAML文件加载配置

    Args:
        config_path: 配置文件路径
        base_dir: 用于解析相对路径（如日志目录）的目录，默认为配置文件所在目录

    Returns:
        验证后的GridNavConfig对象

    Raises:
        FileNotFoundError: 配置文件不存在
        yaml.YAMLError: YAML格式错误
        ValueError: 配置文件为空
        ConfigurationError: 顶层不是映射或字段验证失败
    """
    config_path = Path(config_path)
    base_dir = Path(base_dir).resolve() if base_dir is not None else config_path.resolve().parent

    raw_config = _read_yaml(config_path)
    _apply_relative_paths(raw_config, base_dir)

    try:
        config = GridNavConfig(**raw_config)
    except ValidationError as e:
        logger.error(f"配置验证失败: {config_path}")
        for line in _describe_errors(e):
            logger.error(f"  {line}")
        raise ConfigurationError(f"配置验证失败: {config_path}\n{e}") from e

    logger.info(f"配置加载成功: {config_path}")
    return config


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    """读取配置文件，返回顶层映射"""
    if not config_path.exists():
        error_msg = f"配置文件不存在: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        error_msg = f"YAML格式错误: {e}"
        logger.error(error_msg)
        raise yaml.YAMLError(error_msg) from e

    if raw_config is None:
        error_msg = f"配置文件为空: {config_path}"
        logger.error(error_msg)
        raise ValueError(error_msg)

    if not isinstance(raw_config, dict):
        error_msg = f"配置文件顶层必须是映射: {type(raw_config).__name__}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    return raw_config


def _describe_errors(error: ValidationError) -> List[str]:
    """每个出错字段一行: "path_planning -> rrt -> goal_bias: ..." """
    return [
        f"{' -> '.join(str(loc) for loc in item['loc'])}: {item['msg']}"
        for item in error.errors()
    ]


def _resolve_path(value: Optional[str], base_dir: Path) -> Optional[str]:
    """相对路径以 base_dir 为基准转为绝对路径"""
    if value is None:
        return None
    path = Path(value)
    if not path.is_absolute():
        path = base_dir / path
    return str(path.resolve())


def _apply_relative_paths(raw_config: Dict[str, Any], base_dir: Path) -> None:
    """目前只有 logging.log_dir 是路径字段"""
    logging_cfg = raw_config.get('logging')
    if isinstance(logging_cfg, dict) and logging_cfg.get('log_dir'):
        logging_cfg['log_dir'] = _resolve_path(logging_cfg['log_dir'], base_dir)
