# utils - 工具函数模块
"""
工具函数模块提供角度计算与坐标转换工具函数。

包括：
- math_utils: 角度归一化、扫描窗口判定
- coord_transform: 极坐标/笛卡尔坐标转换
"""

from radar_sweep.common.utils.math_utils import (
    deg_to_rad,
    rad_to_deg,
    normalize_azimuth,
    rotate_azimuth,
    azimuth_window,
    azimuth_in_window,
    angle_difference,
)

from radar_sweep.common.utils.coord_transform import (
    polar_to_cartesian,
    cartesian_to_polar,
)

__all__ = [
    'deg_to_rad',
    'rad_to_deg',
    'normalize_azimuth',
    'rotate_azimuth',
    'azimuth_window',
    'azimuth_in_window',
    'angle_difference',
    'polar_to_cartesian',
    'cartesian_to_polar',
]
