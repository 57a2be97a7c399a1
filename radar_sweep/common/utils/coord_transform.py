# 坐标变换模块 (Coordinate Transform Module)
# 本模块提供雷达极坐标与场景笛卡尔坐标之间的转换函数
#
# 场景坐标系: Y轴竖直向上，方位角在XZ水平面内从X轴起算
#   x = R * cos(el) * cos(az)
#   y = R * sin(el)
#   z = R * cos(el) * sin(az)

import numpy as np
from typing import Tuple

from radar_sweep.common.types import Position3D
from radar_sweep.common.utils.math_utils import deg_to_rad, rad_to_deg, normalize_azimuth


# ==================== 极坐标与笛卡尔坐标转换 ====================

def polar_to_cartesian(
    origin: Position3D,
    distance: float,
    azimuth_deg: float,
    elevation_deg: float
) -> Position3D:
    """将以origin为中心的极坐标转换为笛卡尔坐标

    Args:
        origin: 雷达原点
        distance: 到原点的距离 (非负)
        azimuth_deg: 方位角 (度)，任意取值，由三角函数隐式取模
        elevation_deg: 俯仰角 (度)，水平面为0，向上为正

    Returns:
        笛卡尔坐标点。distance为0时恒等于origin
    """
    az = deg_to_rad(azimuth_deg)
    el = deg_to_rad(elevation_deg)

    horizontal = distance * np.cos(el)
    x = origin.x + horizontal * np.cos(az)
    y = origin.y + distance * np.sin(el)
    z = origin.z + horizontal * np.sin(az)
    return Position3D(float(x), float(y), float(z))


def cartesian_to_polar(origin: Position3D, point: Position3D) -> Tuple[float, float, float]:
    """将笛卡尔坐标转换为以origin为中心的极坐标

    Args:
        origin: 雷达原点
        point: 目标点

    Returns:
        (distance, azimuth_deg, elevation_deg): 距离, 方位角 [0, 360), 俯仰角 [-90, 90]
    """
    dx = point.x - origin.x
    dy = point.y - origin.y
    dz = point.z - origin.z

    distance = float(np.sqrt(dx**2 + dy**2 + dz**2))
    if distance == 0.0:
        return 0.0, 0.0, 0.0

    azimuth = normalize_azimuth(rad_to_deg(float(np.arctan2(dz, dx))))
    elevation = rad_to_deg(float(np.arcsin(np.clip(dy / distance, -1.0, 1.0))))
    return distance, azimuth, elevation


__all__ = [
    'polar_to_cartesian',
    'cartesian_to_polar',
]
