# population.py - 编队生成
"""
本模块根据编队模板生成初始飞行器集合。

每个模板生成 instances 架同型飞行器，标识为 "<机型名> Instance: <序号>"，
距离和角速度在模板给定范围内均匀随机，方位角在 [0, 360) 内均匀随机。
"""

from typing import List, Optional, Sequence

import numpy as np

from radar_sweep.common.config import FleetTemplate
from radar_sweep.common.logger import get_logger
from radar_sweep.common.types import Position3D
from radar_sweep.backend.environment.aircraft import Aircraft


INSTANCE_SEPARATOR = " Instance: "


def instance_id(name: str, index: int) -> str:
    """生成飞行器实例标识"""
    return f"{name}{INSTANCE_SEPARATOR}{index}"


def generate_fleet(origin: Position3D,
                   templates: Sequence[FleetTemplate],
                   instances: int,
                   rng: Optional[np.random.Generator] = None) -> List[Aircraft]:
    """
    生成飞行器编队

    按实例序号交错排列各模板，与演示场景的生成顺序一致。

    Args:
        origin: 雷达原点
        templates: 编队模板
        instances: 每个模板的实例数
        rng: 随机数生成器，None则使用未设种子的生成器

    Returns:
        飞行器列表
    """
    logger = get_logger("population")
    rng = rng if rng is not None else np.random.default_rng()

    fleet: List[Aircraft] = []
    for i in range(instances):
        for template in templates:
            fleet.append(Aircraft(
                aircraft_id=instance_id(template.name, i),
                aircraft_type=template.category,
                origin=origin,
                angular_speed=rng.uniform(*template.speed_range),
                distance=rng.uniform(*template.distance_range),
                azimuth=rng.uniform(0.0, 360.0),
                elevation=template.elevation,
            ))

    logger.info(f"编队生成完成: {len(fleet)} 架飞行器, {len(templates)} 个模板")
    return fleet


__all__ = [
    "INSTANCE_SEPARATOR",
    "instance_id",
    "generate_fleet",
]
