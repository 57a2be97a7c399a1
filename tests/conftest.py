# pytest配置文件

import pytest
import sys
sys.path.insert(0, '.')

from radar_sweep.common.types import AircraftType, Position3D
from radar_sweep.backend.environment.aircraft import Aircraft
from radar_sweep.backend.sensor.detection_cone import DetectionCone


@pytest.fixture
def origin():
    """雷达原点"""
    return Position3D(0.0, 0.0, 0.0)


@pytest.fixture
def make_aircraft(origin):
    """飞行器工厂"""
    counter = {'n': 0}

    def _make(distance=100.0, azimuth=0.0, elevation=5.0, speed=0.0,
              aircraft_type=AircraftType.CIVILIAN, aircraft_id=None):
        counter['n'] += 1
        return Aircraft(
            aircraft_id=aircraft_id or f"test-{counter['n']}",
            aircraft_type=aircraft_type,
            origin=origin,
            angular_speed=speed,
            distance=distance,
            azimuth=azimuth,
            elevation=elevation,
        )

    return _make


@pytest.fixture
def cone(origin):
    """中心0°、宽度10°、距离200、最大俯仰10°的探测扇区"""
    return DetectionCone(origin, detection_range=200.0, sweep_width=10.0, max_elevation=10.0)
