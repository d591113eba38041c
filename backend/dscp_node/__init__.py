"""
dscp 节点 - 运行期配置模块

模块结构：
- config/        环境文件加载、配置校验与日志初始化
- exceptions.py  异常定义
"""

__version__ = "0.1.0"
