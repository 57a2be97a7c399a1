# detection_cone.py - 旋转探测扇区
"""
本模块实现旋转扫描雷达的探测扇区。

探测扇区由当前波束方位角、扫描宽度、俯仰范围和最大探测距离定义。
每个tick波束方位角旋转一次，检测时对飞行器做距离、俯仰和方位三项判定：

    距离: distance <= detection_range
    俯仰: min_elevation <= elevation <= max_elevation
    方位: azimuth ∈ [current - width/2, current + width/2] (mod 360)
"""

from dataclasses import dataclass
from typing import Iterable, List, TypeVar

from radar_sweep.common.types import Position3D
from radar_sweep.common.utils.math_utils import (
    normalize_azimuth, rotate_azimuth, azimuth_in_window
)


T = TypeVar('T')


@dataclass(frozen=True)
class SensorParameters:
    """
    探测扇区静态参数快照

    Attributes:
        detection_range: 最大探测距离
        sweep_width: 扫描宽度 [度]
        max_elevation: 最大俯仰角 [度]
        min_elevation: 最小俯仰角 [度]
    """
    detection_range: float
    sweep_width: float
    max_elevation: float
    min_elevation: float = 0.0


class DetectionCone:
    """
    旋转探测扇区

    构造后只有当前方位角会变化。
    """

    def __init__(self,
                 origin: Position3D,
                 detection_range: float = 200.0,
                 sweep_width: float = 10.0,
                 max_elevation: float = 90.0,
                 min_elevation: float = 0.0,
                 azimuth: float = 0.0):
        """
        初始化探测扇区

        Args:
            origin: 雷达原点
            detection_range: 最大探测距离
            sweep_width: 扫描宽度 [度], 0-360
            max_elevation: 最大俯仰角 [度]
            min_elevation: 最小俯仰角 [度]
            azimuth: 初始波束方位角 [度]
        """
        self._origin = origin
        self._detection_range = float(detection_range)
        self._sweep_width = float(sweep_width)
        self._min_elevation = float(min_elevation)
        self._max_elevation = float(max_elevation)
        self._azimuth = normalize_azimuth(azimuth)

    @property
    def origin(self) -> Position3D:
        return self._origin

    def current_azimuth(self) -> float:
        """当前波束方位角 [度], [0, 360)"""
        return self._azimuth

    def parameters(self) -> SensorParameters:
        """静态参数快照"""
        return SensorParameters(
            detection_range=self._detection_range,
            sweep_width=self._sweep_width,
            max_elevation=self._max_elevation,
            min_elevation=self._min_elevation,
        )

    def rotate(self, delta_azimuth: float) -> None:
        """
        旋转波束

        Args:
            delta_azimuth: 旋转量 [度]，可为负值或超过一圈
        """
        self._azimuth = rotate_azimuth(self._azimuth, delta_azimuth)

    def contains(self, distance: float, azimuth: float, elevation: float) -> bool:
        """判断给定极坐标点是否在扇区内（边界包含）"""
        if distance > self._detection_range:
            return False
        if not self._min_elevation <= elevation <= self._max_elevation:
            return False
        return azimuth_in_window(azimuth, self._azimuth, self._sweep_width)

    def detect(self, aircraft: Iterable[T]) -> List[T]:
        """
        批量检测

        稳定过滤，保持输入顺序，不修改任何输入。

        Args:
            aircraft: 具有distance/azimuth/elevation属性的对象

        Returns:
            被探测到的对象列表
        """
        return [
            ac for ac in aircraft
            if self.contains(ac.distance, ac.azimuth, ac.elevation)
        ]

    def __repr__(self) -> str:
        return (f"DetectionCone(azimuth={self._azimuth:.2f}, width={self._sweep_width}, "
                f"range={self._detection_range}, elevation=[{self._min_elevation}, {self._max_elevation}])")


__all__ = [
    "SensorParameters",
    "DetectionCone",
]
