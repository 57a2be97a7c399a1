# world.py - 世界状态
"""
本模块实现仿真世界状态。

World 持有全部飞行器和唯一的探测扇区，每个tick统一推进二者，
并回答"当前哪些飞行器被探测到"。对外只暴露不可变快照。
"""

from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from radar_sweep.common.config import SystemConfig
from radar_sweep.common.exceptions import SimulationError
from radar_sweep.common.logger import get_logger
from radar_sweep.common.types import Position3D
from radar_sweep.backend.environment.aircraft import Aircraft, AircraftState
from radar_sweep.backend.environment.population import generate_fleet
from radar_sweep.backend.sensor.detection_cone import DetectionCone, SensorParameters


class World:
    """
    仿真世界

    飞行器与探测扇区的方位角速率可以使用不同的时间缩放因子，
    二者都是 delta_time 的确定性函数。
    """

    def __init__(self,
                 cone: DetectionCone,
                 aircraft: Iterable[Aircraft] = (),
                 radar_rotation_scale: float = 1.0,
                 aircraft_speed_scale: float = 1.0):
        """
        初始化世界

        Args:
            cone: 探测扇区
            aircraft: 初始飞行器集合
            radar_rotation_scale: 波束旋转量 = delta_time * radar_rotation_scale [度]
            aircraft_speed_scale: 飞行器推进时间 = delta_time * aircraft_speed_scale
        """
        self._logger = get_logger("world")
        self._cone = cone
        self._radar_rotation_scale = radar_rotation_scale
        self._aircraft_speed_scale = aircraft_speed_scale
        self._aircraft: List[Aircraft] = []
        self._index: Dict[str, Aircraft] = {}

        for ac in aircraft:
            self.add_aircraft(ac)

    @classmethod
    def from_config(cls, config: SystemConfig,
                    rng: Optional[np.random.Generator] = None) -> 'World':
        """
        根据系统配置创建世界并生成编队

        Args:
            config: 系统配置
            rng: 随机数生成器，None则按配置中的种子创建
        """
        origin = Position3D(*config.sensor.origin)
        cone = DetectionCone(
            origin=origin,
            detection_range=config.sensor.detection_range,
            sweep_width=config.sensor.sweep_width,
            max_elevation=config.sensor.max_elevation,
            min_elevation=config.sensor.min_elevation,
            azimuth=config.sensor.initial_azimuth,
        )

        if rng is None:
            rng = np.random.default_rng(config.simulation.seed)

        fleet = generate_fleet(
            origin, config.fleet.templates, config.fleet.instances_per_template, rng
        )
        return cls(
            cone,
            fleet,
            radar_rotation_scale=config.simulation.radar_rotation_scale,
            aircraft_speed_scale=config.simulation.aircraft_speed_scale,
        )

    @property
    def cone(self) -> DetectionCone:
        return self._cone

    @property
    def origin(self) -> Position3D:
        return self._cone.origin

    @property
    def aircraft(self) -> Tuple[Aircraft, ...]:
        return tuple(self._aircraft)

    def __len__(self) -> int:
        return len(self._aircraft)

    def add_aircraft(self, aircraft: Aircraft) -> None:
        """
        加入飞行器

        Raises:
            SimulationError: 标识重复或原点与探测扇区不一致
        """
        if aircraft.id in self._index:
            raise SimulationError(f"飞行器标识重复: {aircraft.id}")
        if aircraft.origin != self._cone.origin:
            raise SimulationError(
                f"飞行器原点与雷达原点不一致: {aircraft.id} {aircraft.origin} != {self._cone.origin}"
            )
        self._aircraft.append(aircraft)
        self._index[aircraft.id] = aircraft

    def get_aircraft(self, aircraft_id: str) -> Optional[Aircraft]:
        return self._index.get(aircraft_id)

    def tick(self, delta_time: float) -> None:
        """
        推进一个时间步

        零或负的时间步长是允许的，分别对应不旋转和反向旋转。
        """
        self._cone.rotate(delta_time * self._radar_rotation_scale)
        aircraft_delta = delta_time * self._aircraft_speed_scale
        for ac in self._aircraft:
            ac.advance(aircraft_delta)

    def detected_aircraft(self) -> List[AircraftState]:
        """当前被探测到的飞行器快照，每次调用重新计算"""
        return [ac.snapshot() for ac in self._cone.detect(self._aircraft)]

    def aircraft_states(self) -> List[AircraftState]:
        """全部飞行器快照"""
        return [ac.snapshot() for ac in self._aircraft]

    def radar_azimuth(self) -> float:
        return self._cone.current_azimuth()

    def sensor_parameters(self) -> SensorParameters:
        return self._cone.parameters()

    def __repr__(self) -> str:
        return f"World(aircraft={len(self._aircraft)}, cone={self._cone!r})"


__all__ = [
    "World",
]
