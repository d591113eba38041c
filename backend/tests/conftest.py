"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(clean_env, write_env):
        path = write_env(".env", "API_PORT=8080\n")
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from dscp_node.config import RuntimeConfig
from dscp_node.config import runtime_config as runtime_config_module
from dscp_node.config.env_file import BASE_DIR_ENV_VAR, MODE_ENV_VAR


# ============================================================================
# 环境 Fixtures
# ============================================================================

@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """隔离进程环境：移除已知变量（任意大小写），测试结束后整体恢复"""
    saved = dict(os.environ)
    known = {name.upper() for name in [*RuntimeConfig.env_names(), MODE_ENV_VAR, BASE_DIR_ENV_VAR]}
    for name in [key for key in os.environ if key.upper() in known]:
        del os.environ[name]
    try:
        yield
    finally:
        os.environ.clear()
        os.environ.update(saved)


@pytest.fixture
def reset_global_config() -> Generator[None, None, None]:
    """清空全局配置实例"""
    runtime_config_module._config = None
    yield
    runtime_config_module._config = None


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """恢复根日志的 handler 与级别"""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_env(temp_dir: Path) -> Callable[[str, str], Path]:
    """在临时基础目录下写入环境文件"""

    def _write(relative: str, content: str) -> Path:
        path = temp_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
