# 常数模块 (Constants Module)
# 本模块定义扫描雷达仿真系统使用的数学常数和系统默认值

import numpy as np


class MathConstants:
    """
    数学常数类 (Mathematical Constants Class)
    """

    PI = np.pi

    # 完整圆周 (Full Circle) - 度
    FULL_CIRCLE_DEG = 360.0

    # 角度转换因子
    DEG_TO_RAD = np.pi / 180.0
    RAD_TO_DEG = 180.0 / np.pi


class SensorDefaults:
    """
    探测扇区默认参数 (Detection Cone Defaults)
    """

    # 最大探测距离 (仿真单位)
    DETECTION_RANGE = 400.0

    # 扫描扇区宽度 - 度
    SWEEP_WIDTH = 120.0

    # 俯仰范围 - 度
    MIN_ELEVATION = 0.0
    MAX_ELEVATION = 100.0


class SimulationDefaults:
    """
    仿真推进默认参数 (Simulation Stepping Defaults)
    """

    # 广播周期 - 秒 (约60Hz)
    TICK_INTERVAL = 0.0167

    # 每个tick的逻辑时间步长 (与实际流逝时间无关)
    TICK_DELTA = 0.5

    # 波束旋转速率缩放: 每单位时间步长旋转的角度
    RADAR_ROTATION_SCALE = 0.5

    # 飞行器角速度缩放
    AIRCRAFT_SPEED_SCALE = 0.05


class NetworkDefaults:
    """
    网络默认参数 (Network Defaults)
    """

    HOST = '0.0.0.0'
    PORT = 3000
    WEBSOCKET_PATH = '/'
    FORMAT = 'json'


# 常用常数快捷方式
PI = MathConstants.PI
FULL_CIRCLE_DEG = MathConstants.FULL_CIRCLE_DEG
DEG_TO_RAD = MathConstants.DEG_TO_RAD
RAD_TO_DEG = MathConstants.RAD_TO_DEG


__all__ = [
    'MathConstants',
    'SensorDefaults',
    'SimulationDefaults',
    'NetworkDefaults',
    'PI',
    'FULL_CIRCLE_DEG',
    'DEG_TO_RAD',
    'RAD_TO_DEG',
]
