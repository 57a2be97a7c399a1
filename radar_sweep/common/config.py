# 配置管理模块

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field

import toml

from radar_sweep.common.constants import (
    SensorDefaults, SimulationDefaults, NetworkDefaults, FULL_CIRCLE_DEG
)
from radar_sweep.common.exceptions import ConfigError
from radar_sweep.common.types import AircraftType


@dataclass
class SensorConfig:
    """探测扇区配置"""
    origin: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    detection_range: float = SensorDefaults.DETECTION_RANGE
    sweep_width: float = SensorDefaults.SWEEP_WIDTH
    min_elevation: float = SensorDefaults.MIN_ELEVATION
    max_elevation: float = SensorDefaults.MAX_ELEVATION
    initial_azimuth: float = 0.0


@dataclass
class SimulationConfig:
    """仿真推进配置"""
    tick_interval: float = SimulationDefaults.TICK_INTERVAL
    tick_delta: float = SimulationDefaults.TICK_DELTA
    radar_rotation_scale: float = SimulationDefaults.RADAR_ROTATION_SCALE
    aircraft_speed_scale: float = SimulationDefaults.AIRCRAFT_SPEED_SCALE
    seed: Optional[int] = None


@dataclass
class FleetTemplate:
    """编队模板：同一机型的一组飞行器"""
    name: str
    category: AircraftType
    elevation: float
    distance_range: Tuple[float, float]
    speed_range: Tuple[float, float] = (1.0, 3.0)


def default_templates() -> List[FleetTemplate]:
    return [
        FleetTemplate('C20A - AFRC', AircraftType.CIVILIAN, 40.0, (200.0, 400.0)),
        FleetTemplate('Eurocopter AS350 Écureuil', AircraftType.POLICE, 20.0, (40.0, 300.0)),
        FleetTemplate('F-16D', AircraftType.MILITARY, 10.0, (100.0, 300.0)),
    ]


@dataclass
class FleetConfig:
    """编队配置"""
    instances_per_template: int = 100
    templates: List[FleetTemplate] = field(default_factory=default_templates)


@dataclass
class NetworkConfig:
    """网络配置"""
    host: str = NetworkDefaults.HOST
    port: int = NetworkDefaults.PORT
    websocket_path: str = NetworkDefaults.WEBSOCKET_PATH
    format: str = NetworkDefaults.FORMAT


@dataclass
class CatalogConfig:
    """机型目录配置"""
    path: Optional[str] = None


@dataclass
class SystemConfig:
    """系统总配置"""
    version: str = '1.0'
    enable_logging: bool = True
    log_level: str = 'INFO'
    log_path: str = './logs'
    sensor: SensorConfig = field(default_factory=SensorConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    fleet: FleetConfig = field(default_factory=FleetConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)


class ConfigManager:
    """配置管理器"""

    def __init__(self, config_dir: str = '.'):
        self.config_dir = Path(config_dir)
        self._config: Optional[SystemConfig] = None

    def load_config(self, filename: str = 'radar_config.toml') -> SystemConfig:
        config_path = self.config_dir / filename

        if not config_path.exists():
            self._config = SystemConfig()
            return self._config

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = toml.load(f)
        except (toml.TomlDecodeError, ValueError, IndexError) as e:
            raise ConfigError(f'配置文件解析失败: {config_path}: {e}')

        self._config = self.parse_config(data)
        return self._config

    def parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        def get_section(section: str, default: Dict = None) -> Dict:
            return data.get(section, default or {})

        system = get_section('system', {})
        config = SystemConfig(
            version=system.get('version', '1.0'),
            enable_logging=system.get('enable_logging', True),
            log_level=system.get('log_level', 'INFO'),
            log_path=system.get('log_path', './logs'),
        )

        sensor = get_section('sensor', {})
        config.sensor = SensorConfig(
            origin=tuple(float(v) for v in sensor.get('origin', (0.0, 0.0, 0.0))),
            detection_range=float(sensor.get('detection_range', SensorDefaults.DETECTION_RANGE)),
            sweep_width=float(sensor.get('sweep_width', SensorDefaults.SWEEP_WIDTH)),
            min_elevation=float(sensor.get('min_elevation', SensorDefaults.MIN_ELEVATION)),
            max_elevation=float(sensor.get('max_elevation', SensorDefaults.MAX_ELEVATION)),
            initial_azimuth=float(sensor.get('initial_azimuth', 0.0)),
        )

        sim = get_section('simulation', {})
        config.simulation = SimulationConfig(
            tick_interval=float(sim.get('tick_interval', SimulationDefaults.TICK_INTERVAL)),
            tick_delta=float(sim.get('tick_delta', SimulationDefaults.TICK_DELTA)),
            radar_rotation_scale=float(sim.get('radar_rotation_scale', SimulationDefaults.RADAR_ROTATION_SCALE)),
            aircraft_speed_scale=float(sim.get('aircraft_speed_scale', SimulationDefaults.AIRCRAFT_SPEED_SCALE)),
            seed=sim.get('seed'),
        )

        fleet = get_section('fleet', {})
        config.fleet = FleetConfig(
            instances_per_template=int(fleet.get('instances_per_template', 100)),
        )
        if 'templates' in fleet:
            config.fleet.templates = [self._parse_template(t) for t in fleet['templates']]

        network = get_section('network', {})
        config.network = NetworkConfig(
            host=network.get('host', NetworkDefaults.HOST),
            port=int(network.get('port', NetworkDefaults.PORT)),
            websocket_path=network.get('websocket_path', NetworkDefaults.WEBSOCKET_PATH),
            format=network.get('format', NetworkDefaults.FORMAT),
        )

        catalog = get_section('catalog', {})
        config.catalog = CatalogConfig(path=catalog.get('path'))

        validate_config(config)
        return config

    @staticmethod
    def _parse_template(data: Dict[str, Any]) -> FleetTemplate:
        try:
            category = AircraftType(data.get('category', 'Unknown'))
        except ValueError:
            raise ConfigError(f"未知的飞行器类别: {data.get('category')}")

        try:
            return FleetTemplate(
                name=data['name'],
                category=category,
                elevation=float(data.get('elevation', 0.0)),
                distance_range=tuple(float(v) for v in data['distance_range']),
                speed_range=tuple(float(v) for v in data.get('speed_range', (1.0, 3.0))),
            )
        except KeyError as e:
            raise ConfigError(f'编队模板缺少字段: {e}')

    def get_config(self) -> SystemConfig:
        if self._config is None:
            self.load_config()
        return self._config


def validate_config(config: SystemConfig) -> None:
    """
    校验配置是否满足扫描仿真的基本约束

    Raises:
        ConfigError: 配置值非法
    """
    sensor = config.sensor
    if len(sensor.origin) != 3:
        raise ConfigError(f'雷达原点必须为三维坐标: {sensor.origin}')
    if sensor.detection_range < 0:
        raise ConfigError(f'探测距离不能为负: {sensor.detection_range}')
    if not 0.0 <= sensor.sweep_width <= FULL_CIRCLE_DEG:
        raise ConfigError(f'扫描宽度必须在[0, 360]内: {sensor.sweep_width}')
    if sensor.max_elevation < sensor.min_elevation:
        raise ConfigError(
            f'最大俯仰角({sensor.max_elevation})小于最小俯仰角({sensor.min_elevation})'
        )

    if config.simulation.tick_interval <= 0:
        raise ConfigError(f'广播周期必须为正: {config.simulation.tick_interval}')

    fleet = config.fleet
    if fleet.instances_per_template < 0:
        raise ConfigError(f'编队实例数不能为负: {fleet.instances_per_template}')
    for template in fleet.templates:
        low, high = template.distance_range
        if low < 0 or high < low:
            raise ConfigError(f'编队模板距离范围非法: {template.name} {template.distance_range}')

    if config.network.format not in ('json', 'msgpack'):
        raise ConfigError(f'不支持的序列化格式: {config.network.format}')


__all__ = [
    'SensorConfig', 'SimulationConfig', 'FleetTemplate', 'FleetConfig',
    'NetworkConfig', 'CatalogConfig', 'SystemConfig',
    'ConfigManager', 'validate_config', 'default_templates',
]
