# core - 核心模块
from radar_sweep.backend.core.time_manager import TimeManager
from radar_sweep.backend.core.world import World
from radar_sweep.backend.core.radar_core import RadarCore

__all__ = [
    "TimeManager",
    "World",
    "RadarCore",
]
