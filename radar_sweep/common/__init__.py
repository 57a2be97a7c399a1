# common - 公共模块
"""
公共模块提供系统级别的通用功能，包括：
- 类型定义：飞行器类别、三维坐标、系统状态
- 常数：数学常数与系统默认值
- 工具函数：角度归一化、坐标转换
- 配置管理：系统配置加载和校验
- 日志系统：统一的日志记录接口
- 异常定义：系统自定义异常类
"""

from radar_sweep.common.types import (
    AircraftType,
    SystemState,
    Position3D,
)

from radar_sweep.common.constants import (
    PI,
    FULL_CIRCLE_DEG,
    DEG_TO_RAD,
    RAD_TO_DEG,
)

__all__ = [
    "AircraftType",
    "SystemState",
    "Position3D",
    "PI",
    "FULL_CIRCLE_DEG",
    "DEG_TO_RAD",
    "RAD_TO_DEG",
]
