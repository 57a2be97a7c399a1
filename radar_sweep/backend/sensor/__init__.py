# sensor - 探测扇区模块
from radar_sweep.backend.sensor.detection_cone import DetectionCone, SensorParameters

__all__ = [
    "DetectionCone",
    "SensorParameters",
]
