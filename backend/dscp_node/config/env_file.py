"""
环境文件加载 - 按运行模式选择 .env 并写入进程环境

职责：
- 根据 DSCP_ENV 判定运行模式（test / normal）
- 选择对应的环境文件路径（相对固定的基础目录）
- 解析 KEY=VALUE 并写入 os.environ（已存在的变量不覆盖）

使用方式：
    mode = detect_mode()
    applied = apply_env_file(resolve_env_file(mode))
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, MutableMapping
from enum import Enum
from pathlib import Path

from dotenv import dotenv_values

from ..exceptions import MissingOverrideFile

logger = logging.getLogger(__name__)

# 运行模式环境变量
MODE_ENV_VAR = "DSCP_ENV"

# 基础目录覆盖变量
BASE_DIR_ENV_VAR = "DSCP_CONFIG_DIR"

_SOURCE_DIR = Path(__file__).resolve().parents[2]

# 源码目录运行时为 backend/；以 wheel 安装时为 None（改用当前工作目录）
BASE_DIR: Path | None = _SOURCE_DIR if (_SOURCE_DIR.parent / "pyproject.toml").is_file() else None

DEFAULT_ENV_FILE = Path(".env")
TEST_ENV_FILE = Path("tests/test.env")


class RunMode(str, Enum):
    """运行模式"""
    NORMAL = "normal"
    TEST = "test"


def detect_mode(environ: Mapping[str, str] | None = None) -> RunMode:
    """从环境变量判定运行模式"""
    env = os.environ if environ is None else environ
    value = env.get(MODE_ENV_VAR, "").strip().lower()
    return RunMode.TEST if value == RunMode.TEST.value else RunMode.NORMAL


def default_base_dir(environ: Mapping[str, str] | None = None) -> Path:
    """
    获取默认基础目录

    优先级：DSCP_CONFIG_DIR > 源码 backend/ 目录 > 当前工作目录
    """
    env = os.environ if environ is None else environ
    configured = env.get(BASE_DIR_ENV_VAR, "").strip()
    if configured:
        return Path(configured)
    return BASE_DIR if BASE_DIR is not None else Path.cwd()


def resolve_env_file(mode: RunMode, base_dir: str | Path | None = None) -> Path:
    """获取运行模式对应的环境文件路径"""
    base = Path(base_dir) if base_dir is not None else default_base_dir()
    relative = TEST_ENV_FILE if mode is RunMode.TEST else DEFAULT_ENV_FILE
    return (base / relative).resolve()


def read_env_file(path: str | Path) -> dict[str, str]:
    """
    解析环境文件

    无法解析的行、缺少 '=' 的行均被忽略；不做 ${VAR} 插值。

    Raises:
        MissingOverrideFile: 文件不存在
    """
    env_path = Path(path)
    if not env_path.is_file():
        raise MissingOverrideFile(env_path)

    raw = dotenv_values(env_path, interpolate=False, encoding="utf-8")
    return {key: value for key, value in raw.items() if key and value is not None}


def apply_env_file(
    path: str | Path,
    environ: MutableMapping[str, str] | None = None,
) -> dict[str, str]:
    """
    将环境文件写入进程环境（只补缺，不覆盖）

    Returns:
        实际写入的变量
    """
    env = os.environ if environ is None else environ
    try:
        values = read_env_file(path)
    except MissingOverrideFile as e:
        logger.debug(f"{e}，跳过")
        return {}

    applied: dict[str, str] = {}
    for key, value in values.items():
        if key in env:
            logger.debug(f"环境变量已存在，忽略文件中的值: {key}")
            continue
        env[key] = value
        applied[key] = value

    logger.info(f"已加载环境文件: {path} (写入 {len(applied)} 项)")
    return applied
