"""
日志初始化 - 将 LOG_LEVEL 应用到标准库 logging
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .runtime_config import RuntimeConfig

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"

# LOG_LEVEL 取值 -> logging 级别
LEVEL_NAMES: dict[str, int] = {
    "fatal": logging.CRITICAL,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
    "silent": logging.CRITICAL + 10,
}


def resolve_log_level(name: str) -> int | None:
    """解析日志级别名称，无法识别时返回 None"""
    return LEVEL_NAMES.get(name.strip().lower())


def setup_logging(config: RuntimeConfig, force: bool = False) -> int:
    """
    按配置初始化根日志

    Args:
        config: 运行期配置
        force: 是否替换已有的 handler

    Returns:
        实际生效的日志级别
    """
    logging.basicConfig(format=LOG_FORMAT, force=force)

    level = resolve_log_level(config.log_level)
    if level is None:
        level = logging.INFO
        logger.warning(f"未知的日志级别 {config.log_level!r}，使用 info")
    logging.getLogger().setLevel(level)
    return level
