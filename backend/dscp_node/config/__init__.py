"""
配置层 - 加载环境文件与运行期配置

职责：
- 按运行模式加载 .env / tests/test.env（不覆盖已有环境变量）
- 校验并转换已知环境变量，生成不可变配置
- 按 LOG_LEVEL 初始化日志
"""

from .env_file import (
    RunMode,
    apply_env_file,
    default_base_dir,
    detect_mode,
    read_env_file,
    resolve_env_file,
)
from .log_setup import resolve_log_level, setup_logging
from .runtime_config import RuntimeConfig, get_config, load_config, reload_config

__all__ = [
    "RunMode",
    "detect_mode",
    "default_base_dir",
    "resolve_env_file",
    "read_env_file",
    "apply_env_file",
    "RuntimeConfig",
    "load_config",
    "get_config",
    "reload_config",
    "resolve_log_level",
    "setup_logging",
]
