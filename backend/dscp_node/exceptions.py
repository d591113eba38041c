"""
异常定义

- ConfigValidationError: 环境变量无法转换为声明的类型（致命，启动中止）
- MissingOverrideFile: 环境文件不存在（非致命，加载器内部处理）
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


class DscpNodeError(Exception):
    """基础异常"""
    pass


@dataclass(frozen=True)
class InvalidVariable:
    """单个校验失败的环境变量"""
    name: str
    expected: str
    value: Any

    def __str__(self) -> str:
        return f"{self.name} (期望类型 {self.expected}, 实际值 {self.value!r})"


class ConfigValidationError(DscpNodeError):
    """配置校验错误"""

    def __init__(self, invalid: list[InvalidVariable]):
        self.invalid = list(invalid)
        details = "; ".join(str(item) for item in self.invalid)
        super().__init__(f"环境变量校验失败: {details}")

    @property
    def names(self) -> list[str]:
        return [item.name for item in self.invalid]


class MissingOverrideFile(DscpNodeError):
    """环境文件不存在"""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"环境文件不存在: {path}")
