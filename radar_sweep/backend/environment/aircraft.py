# aircraft.py - 飞行器模型
"""
本模块实现绕雷达原点做方位角运动的飞行器。

飞行器的距离和俯仰角在创建后保持不变，只有方位角随时间推进；
笛卡尔位置始终由 (原点, 距离, 方位角, 俯仰角) 计算得到，不单独维护。
"""

from dataclasses import dataclass

from radar_sweep.common.types import AircraftType, Position3D
from radar_sweep.common.utils.coord_transform import polar_to_cartesian
from radar_sweep.common.utils.math_utils import normalize_azimuth, rotate_azimuth


@dataclass(frozen=True)
class AircraftState:
    """
    飞行器状态快照

    不可变副本，可安全地交给网络层或其他任务读取。

    Attributes:
        id: 飞行器标识
        type: 飞行器类别
        distance: 到雷达原点的距离
        azimuth: 方位角 [度], [0, 360)
        elevation: 俯仰角 [度]
        position: 笛卡尔位置
    """
    id: str
    type: AircraftType
    distance: float
    azimuth: float
    elevation: float
    position: Position3D


class Aircraft:
    """
    飞行器

    以固定距离和俯仰角绕雷达原点旋转，角速度可为零或负值（反向旋转）。
    """

    def __init__(self,
                 aircraft_id: str,
                 aircraft_type: AircraftType,
                 origin: Position3D,
                 angular_speed: float,
                 distance: float,
                 azimuth: float,
                 elevation: float = 0.0):
        """
        初始化飞行器

        Args:
            aircraft_id: 唯一标识
            aircraft_type: 飞行器类别
            origin: 雷达原点（与探测扇区共享）
            angular_speed: 角速度 [度/单位时间]
            distance: 到原点的距离
            azimuth: 初始方位角 [度]
            elevation: 俯仰角 [度]
        """
        self._id = aircraft_id
        self._type = aircraft_type
        self._origin = origin
        self._angular_speed = float(angular_speed)
        self._distance = float(distance)
        self._elevation = float(elevation)
        self._azimuth = 0.0
        self._position = origin
        self._set_azimuth(normalize_azimuth(azimuth))

    @property
    def id(self) -> str:
        return self._id

    @property
    def type(self) -> AircraftType:
        return self._type

    @property
    def origin(self) -> Position3D:
        return self._origin

    @property
    def distance(self) -> float:
        return self._distance

    @property
    def azimuth(self) -> float:
        """方位角 [度], [0, 360)"""
        return self._azimuth

    @property
    def elevation(self) -> float:
        return self._elevation

    @property
    def angular_speed(self) -> float:
        return self._angular_speed

    @property
    def position(self) -> Position3D:
        return self._position

    def advance(self, delta_time: float) -> None:
        """
        按角速度推进方位角

        Args:
            delta_time: 时间步长，可为零或负值
        """
        self._set_azimuth(rotate_azimuth(self._azimuth, self._angular_speed * delta_time))

    def set_angular_speed(self, value: float) -> None:
        """设置角速度，下一次advance时生效"""
        self._angular_speed = float(value)

    def snapshot(self) -> AircraftState:
        """获取当前状态的不可变快照"""
        return AircraftState(
            id=self._id,
            type=self._type,
            distance=self._distance,
            azimuth=self._azimuth,
            elevation=self._elevation,
            position=self._position,
        )

    def _set_azimuth(self, azimuth: float) -> None:
        # 方位角与位置同步更新
        self._azimuth = azimuth
        self._position = polar_to_cartesian(
            self._origin, self._distance, self._azimuth, self._elevation
        )

    def __repr__(self) -> str:
        return (f"Aircraft(id={self._id!r}, type={self._type.value}, "
                f"distance={self._distance:.1f}, azimuth={self._azimuth:.2f}, "
                f"elevation={self._elevation:.1f})")


__all__ = [
    "Aircraft",
    "AircraftState",
]
