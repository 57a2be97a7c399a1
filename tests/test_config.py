# 配置与目录测试

import json
import pytest
import sys
sys.path.insert(0, '.')

from radar_sweep.common.config import ConfigManager, SystemConfig, validate_config
from radar_sweep.common.exceptions import CatalogError, ConfigError
from radar_sweep.common.types import AircraftType
from radar_sweep.backend.catalog.metadata_catalog import (
    AircraftInfo, StaticMetadataCatalog, catalog_name, load_catalog
)
from radar_sweep.main import build_core, load_config, parse_args


CONFIG_TEXT = """
[system]
log_level = "DEBUG"

[sensor]
detection_range = 250.0
sweep_width = 30.0
max_elevation = 45.0

[simulation]
tick_interval = 0.05
tick_delta = 1.0
seed = 11

[fleet]
instances_per_template = 2

[[fleet.templates]]
name = "Bayraktar TB2"
category = "International"
elevation = 15.0
distance_range = [50.0, 150.0]

[network]
port = 4000
"""


class TestConfigManager:
    """配置管理测试"""

    def test_missing_file_defaults(self, tmp_path):
        """配置文件不存在时使用默认值"""
        config = ConfigManager(str(tmp_path)).load_config('missing.toml')

        assert config.sensor.detection_range == 400.0
        assert config.sensor.sweep_width == 120.0
        assert config.sensor.max_elevation == 100.0
        assert config.simulation.tick_delta == 0.5
        assert config.network.port == 3000
        assert len(config.fleet.templates) == 3

    def test_load_toml(self, tmp_path):
        """加载TOML配置"""
        (tmp_path / 'radar.toml').write_text(CONFIG_TEXT, encoding='utf-8')
        config = ConfigManager(str(tmp_path)).load_config('radar.toml')

        assert config.log_level == "DEBUG"
        assert config.sensor.detection_range == 250.0
        assert config.sensor.sweep_width == 30.0
        assert config.simulation.seed == 11
        assert config.network.port == 4000
        assert config.fleet.instances_per_template == 2

        template = config.fleet.templates[0]
        assert template.name == "Bayraktar TB2"
        assert template.category == AircraftType.INTERNATIONAL
        assert template.distance_range == (50.0, 150.0)
        assert template.speed_range == (1.0, 3.0)

    @pytest.mark.parametrize("section, key, value", [
        ('sensor', 'detection_range', -1.0),
        ('sensor', 'sweep_width', 361.0),
        ('sensor', 'max_elevation', -5.0),
        ('simulation', 'tick_interval', 0.0),
        ('network', 'format', 'xml'),
    ])
    def test_invalid_values(self, section, key, value):
        """违反约束的配置值抛出ConfigError"""
        with pytest.raises(ConfigError):
            ConfigManager().parse_config({section: {key: value}})

    def test_unknown_category(self):
        data = {'fleet': {'templates': [{'name': 'X', 'category': 'Alien', 'distance_range': [1, 2]}]}}
        with pytest.raises(ConfigError):
            ConfigManager().parse_config(data)

    def test_malformed_toml(self, tmp_path):
        (tmp_path / 'bad.toml').write_text("[sensor\nrange = ", encoding='utf-8')
        with pytest.raises(ConfigError):
            ConfigManager(str(tmp_path)).load_config('bad.toml')

    def test_defaults_valid(self):
        validate_config(SystemConfig())


class TestMetadataCatalog:
    """机型目录测试"""

    def test_catalog_name(self):
        assert catalog_name("F-16D Instance: 12") == "F-16D"
        assert catalog_name("Eurocopter AS350 Écureuil Instance: 0") == "Eurocopter AS350 Écureuil"
        assert catalog_name("F-16D") == "F-16D"

    def test_lookup(self):
        catalog = StaticMetadataCatalog([AircraftInfo("f16.png", "F-16D", "Military", "Plane")])

        assert catalog.lookup_aircraft("F-16D Instance: 1").class_name == "Plane"
        assert catalog.lookup("Unknown").is_empty

    def test_from_file(self, tmp_path):
        path = tmp_path / 'catalog.json'
        path.write_text(json.dumps([
            {"name": "F-16D", "image": "f16.png", "type": "Military", "class": "Plane"},
        ]), encoding='utf-8')

        catalog = load_catalog(str(path))
        assert len(catalog) == 1
        assert catalog.lookup("F-16D").image == "f16.png"

    def test_no_catalog(self):
        assert load_catalog(None) is None

    def test_invalid_file(self, tmp_path):
        path = tmp_path / 'catalog.json'
        path.write_text('{"name": "F-16D"}', encoding='utf-8')
        with pytest.raises(CatalogError):
            StaticMetadataCatalog.from_file(str(path))

        with pytest.raises(CatalogError):
            StaticMetadataCatalog.from_file(str(tmp_path / 'missing.json'))


class TestMain:
    """入口测试"""

    def test_cli_overrides(self, tmp_path):
        (tmp_path / 'radar.toml').write_text(CONFIG_TEXT, encoding='utf-8')
        args = parse_args(['-c', str(tmp_path / 'radar.toml'), '--port', '5000', '--seed', '3'])
        config = load_config(args)

        assert config.network.port == 5000
        assert config.simulation.seed == 3
        assert config.sensor.detection_range == 250.0

    def test_load_config_independent(self, tmp_path):
        """每次加载得到独立的配置，覆盖项不会泄漏到下一次加载"""
        (tmp_path / 'radar.toml').write_text(CONFIG_TEXT, encoding='utf-8')
        first = load_config(parse_args(['-c', str(tmp_path / 'radar.toml'), '--port', '5000']))
        second = load_config(parse_args(['-c', str(tmp_path / 'missing.toml')]))

        assert first is not second
        assert first.network.port == 5000
        assert second.network.port == 3000
        assert second.sensor.detection_range == 400.0

    def test_build_core(self, tmp_path):
        (tmp_path / 'radar.toml').write_text(CONFIG_TEXT, encoding='utf-8')
        config = load_config(parse_args(['-c', str(tmp_path / 'radar.toml')]))
        core = build_core(config)

        assert len(core.world) == 2
        assert core.network is not None
        assert core.time_manager.tick_interval == 0.05
        assert core.initial_state_message().payload.sweep_width == 30.0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
