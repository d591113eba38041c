"""
运行期配置 - 从进程环境读取并校验节点配置

职责：
- 先按运行模式加载环境文件（只补缺）
- 对六个已知变量做类型转换，缺省时使用默认值
- 校验失败时汇总所有出错变量并中止启动
- 提供不可变的全局配置实例
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from ..exceptions import ConfigValidationError, InvalidVariable
from .env_file import RunMode, apply_env_file, detect_mode, resolve_env_file

logger = logging.getLogger(__name__)

# 十进制整数文本（允许正负号与首尾空白）
_DECIMAL_INT = re.compile(r"\s*[+-]?[0-9]+\s*")


class RuntimeConfig(BaseSettings):
    """运行期配置（环境变量 -> 不可变记录）"""

    # 日志
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")

    # 链上 API 连接
    api_host: str = Field(default="localhost", validation_alias="API_HOST")
    api_port: int = Field(default=9944, validation_alias="API_PORT")

    # 元数据/流程标识长度限制
    metadata_key_length: int = Field(default=32, validation_alias="METADATA_KEY_LENGTH")
    metadata_value_literal_length: int = Field(
        default=32, validation_alias="METADATA_VALUE_LITERAL_LENGTH"
    )
    process_identifier_length: int = Field(default=32, validation_alias="PROCESS_IDENTIFIER_LENGTH")

    # 只识别大写变量名（与进程环境逐字匹配）
    model_config = {
        "case_sensitive": True,
        "populate_by_name": True,
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator(
        "api_port",
        "metadata_key_length",
        "metadata_value_literal_length",
        "process_identifier_length",
        mode="before",
    )
    @classmethod
    def parse_decimal(cls, value: Any) -> Any:
        """整数变量只接受十进制文本（拒绝 "8080.0"、"1_000" 等形式）"""
        if isinstance(value, str):
            if not _DECIMAL_INT.fullmatch(value):
                raise ValueError(f"不是十进制整数: {value!r}")
            return int(value)
        return value

    @property
    def api_url(self) -> str:
        """链上 API 的 websocket 地址"""
        return f"ws://{self.api_host}:{self.api_port}"

    @classmethod
    def env_names(cls) -> list[str]:
        """已知的环境变量名"""
        return [info.validation_alias for info in cls.model_fields.values()]

    @classmethod
    def from_env(cls) -> RuntimeConfig:
        """
        从当前进程环境构建配置

        Raises:
            ConfigValidationError: 存在无法转换的变量
        """
        try:
            return cls()
        except ValidationError as e:
            raise ConfigValidationError(cls._collect_invalid(e)) from e

    @classmethod
    def _collect_invalid(cls, error: ValidationError) -> list[InvalidVariable]:
        """将 pydantic 错误转换为变量级别的描述"""
        fields = {info.validation_alias: info for info in cls.model_fields.values()}
        invalid = []
        for item in error.errors():
            name = str(item["loc"][0]) if item["loc"] else ""
            info = fields.get(name)
            expected = getattr(info.annotation, "__name__", str(info.annotation)) if info else "unknown"
            invalid.append(InvalidVariable(name=name, expected=expected, value=item.get("input")))
        return invalid


def load_config(
    mode: RunMode | None = None,
    base_dir: str | Path | None = None,
) -> RuntimeConfig:
    """加载环境文件并构建配置"""
    mode = mode or detect_mode()
    env_path = resolve_env_file(mode, base_dir)
    logger.info(f"运行模式: {mode.value}, 环境文件: {env_path}")

    apply_env_file(env_path)
    config = RuntimeConfig.from_env()
    logger.info(f"运行期配置: {config.model_dump()}")
    return config


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(
    mode: RunMode | None = None,
    base_dir: str | Path | None = None,
) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    _config = load_config(mode, base_dir)
    return _config
