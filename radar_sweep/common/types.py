# 类型定义模块
from dataclasses import dataclass
from enum import Enum
import numpy as np


class AircraftType(Enum):
    CIVILIAN = 'Civilian'
    POLICE = 'Police'
    MILITARY = 'Military'
    INTERNATIONAL = 'International'
    UNKNOWN = 'Unknown'


class SystemState(Enum):
    IDLE = 'idle'
    RUNNING = 'running'


@dataclass(frozen=True)
class Position3D:
    x: float
    y: float
    z: float

    def distance_to(self, other: 'Position3D') -> float:
        return float(np.sqrt((self.x - other.x)**2 + (self.y - other.y)**2 + (self.z - other.z)**2))


__all__ = [
    'AircraftType', 'SystemState', 'Position3D',
]
