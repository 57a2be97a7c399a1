# 数学工具函数模块 (Math Utilities Module)
# 本模块提供扫描雷达仿真中常用的角度计算函数

import numpy as np
from radar_sweep.common.constants import MathConstants


# ==================== 角度单位转换 ====================

def deg_to_rad(degrees: float) -> float:
    """度转弧度"""
    return degrees * MathConstants.DEG_TO_RAD


def rad_to_deg(radians: float) -> float:
    """弧度转度"""
    return radians * MathConstants.RAD_TO_DEG


# ==================== 方位角归一化 ====================

def normalize_azimuth(angle: float) -> float:
    """将任意角度归一化到 [0, 360)

    适用于任意符号和任意圈数的输入。

    Args:
        angle: 角度 (度)

    Returns:
        [0, 360) 范围内的等效角度 (度)
    """
    full = MathConstants.FULL_CIRCLE_DEG
    result = float(angle) % full
    # 极小负数取模后会舍入为360.0
    if result >= full:
        result -= full
    return result


def rotate_azimuth(azimuth: float, delta: float) -> float:
    """方位角旋转并归一化

    Args:
        azimuth: 当前方位角 (度)
        delta: 旋转量 (度)，负值表示反向旋转

    Returns:
        旋转后的方位角，范围 [0, 360)
    """
    return normalize_azimuth(azimuth + delta)


# ==================== 方位窗口判定 ====================

def azimuth_window(center: float, width: float) -> tuple:
    """计算以center为中心、宽度为width的方位窗口边界

    Returns:
        (lo, hi): 归一化到 [0, 360) 的下界和上界。lo >= hi 按跨越0°/360°的窗口处理
    """
    half = width / 2.0
    return normalize_azimuth(center - half), normalize_azimuth(center + half)


def azimuth_in_window(azimuth: float, center: float, width: float) -> bool:
    """判断方位角是否位于扫描窗口内（边界包含）

    正确处理窗口跨越0°/360°的情况，例如中心5°、宽度20°的窗口为 [355°, 15°]。

    Args:
        azimuth: 目标方位角 (度)，[0, 360)
        center: 窗口中心方位角 (度)
        width: 窗口宽度 (度)

    Returns:
        是否在窗口内
    """
    if width >= MathConstants.FULL_CIRCLE_DEG:
        return True

    lo, hi = azimuth_window(center, width)
    if lo < hi:
        return lo <= azimuth <= hi
    return azimuth >= lo or azimuth <= hi


def angle_difference(angle1: float, angle2: float) -> float:
    """计算两个方位角的最小差值 (度)，结果在 [-180, 180)"""
    diff = normalize_azimuth(angle1 - angle2)
    if diff >= 180.0:
        diff -= MathConstants.FULL_CIRCLE_DEG
    return diff


__all__ = [
    'deg_to_rad',
    'rad_to_deg',
    'normalize_azimuth',
    'rotate_azimuth',
    'azimuth_window',
    'azimuth_in_window',
    'angle_difference',
]
