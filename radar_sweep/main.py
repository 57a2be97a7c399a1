# main.py - 后端主入口
"""
旋转扫描雷达仿真 - 后端主入口

加载配置、生成编队、启动周期广播和WebSocket服务。
"""

import asyncio
import sys
import argparse

import numpy as np

from radar_sweep import __version__
from radar_sweep.common.config import ConfigManager, SystemConfig, validate_config
from radar_sweep.common.exceptions import RadarError
from radar_sweep.common.logger import get_logger, init_logger

from radar_sweep.backend.catalog.metadata_catalog import load_catalog
from radar_sweep.backend.core.radar_core import RadarCore
from radar_sweep.backend.core.time_manager import TimeManager
from radar_sweep.backend.core.world import World
from radar_sweep.backend.network.network_manager import NetworkManager


def build_core(config: SystemConfig) -> RadarCore:
    """
    根据配置组装世界、网络和广播驱动

    Args:
        config: 系统配置

    Returns:
        RadarCore对象
    """
    world = World.from_config(config, rng=np.random.default_rng(config.simulation.seed))

    network = NetworkManager(
        host=config.network.host,
        port=config.network.port,
        path=config.network.websocket_path,
        format=config.network.format,
    )

    time_manager = TimeManager(
        tick_interval=config.simulation.tick_interval,
        tick_delta=config.simulation.tick_delta,
    )

    return RadarCore(
        world=world,
        time_manager=time_manager,
        network=network,
        catalog=load_catalog(config.catalog.path),
    )


async def main_coroutine(config: SystemConfig) -> None:
    """
    主协程

    Args:
        config: 系统配置
    """
    logger = get_logger("main")
    logger.info("=" * 60)
    logger.info("旋转扫描雷达仿真 - 后端系统")
    logger.info(f"版本: {__version__}")
    logger.info("=" * 60)

    core = build_core(config)
    network = core.network

    await core.start()
    logger.success("系统启动完成")
    logger.info("按 Ctrl+C 停止系统")

    try:
        # 启动网络服务器（这会阻塞）
        await network.start()
    except asyncio.CancelledError:
        pass
    finally:
        logger.info("正在关闭系统...")
        await core.stop()
        await network.stop()
        logger.success("系统已安全关闭")


def parse_args(argv=None) -> argparse.Namespace:
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        prog='radar-sweep',
        description='旋转扫描雷达仿真 - 后端系统',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '-c', '--config',
        type=str,
        default='configs/radar_config.toml',
        help='配置文件路径 (默认: configs/radar_config.toml)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default=None,
        help='日志级别 (覆盖配置文件)'
    )

    parser.add_argument(
        '--log-path',
        type=str,
        default=None,
        help='日志文件路径 (覆盖配置文件)'
    )

    parser.add_argument(
        '--host',
        type=str,
        default=None,
        help='服务器监听地址 (覆盖配置文件)'
    )

    parser.add_argument(
        '-p', '--port',
        type=int,
        default=None,
        help='服务器监听端口 (覆盖配置文件)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='编队生成随机种子 (覆盖配置文件)'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> SystemConfig:
    """
    加载配置文件并应用命令行覆盖

    Raises:
        ConfigError: 配置文件非法
    """
    config = ConfigManager().load_config(args.config)

    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_path is not None:
        config.log_path = args.log_path
    if args.host is not None:
        config.network.host = args.host
    if args.port is not None:
        config.network.port = args.port
    if args.seed is not None:
        config.simulation.seed = args.seed

    validate_config(config)
    return config


def main(argv=None):
    """主函数"""
    args = parse_args(argv)
    logger = get_logger("main")

    try:
        config = load_config(args)
        if config.enable_logging:
            init_logger(log_path=config.log_path, log_level=config.log_level)
        asyncio.run(main_coroutine(config))
    except RadarError as e:
        logger.error(f"雷达错误: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("收到中断信号，正在退出...")
        sys.exit(0)


if __name__ == '__main__':
    main()
