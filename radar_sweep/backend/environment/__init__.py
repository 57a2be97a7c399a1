# environment - 环境模拟模块
from radar_sweep.backend.environment.aircraft import Aircraft, AircraftState
from radar_sweep.backend.environment.population import generate_fleet, instance_id

__all__ = [
    "Aircraft",
    "AircraftState",
    "generate_fleet",
    "instance_id",
]
