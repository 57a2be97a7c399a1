# 日志系统模块

import sys
from pathlib import Path
from typing import Optional
from loguru import logger as loguru_logger


_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[component]}</magenta> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[component]} | "
    "{name}:{function}:{line} - {message}"
)

# 未绑定组件名的日志记录使用默认组件名
loguru_logger.configure(extra={'component': 'radar'})


class RadarLogger:
    """雷达系统日志管理器"""

    def __init__(
        self,
        log_path: str = './logs',
        log_level: str = 'INFO',
        enable_console: bool = True,
        enable_file: bool = True,
        rotation: str = '100 MB',
        retention: str = '30 days'
    ):
        """初始化日志系统"""
        self.log_path = Path(log_path)
        self.log_level = log_level

        # 移除默认处理器
        loguru_logger.remove()

        # 添加控制台处理器
        if enable_console:
            loguru_logger.add(
                sys.stderr,
                format=_CONSOLE_FORMAT,
                level=log_level,
                colorize=True
            )

        # 添加文件处理器
        if enable_file:
            self.log_path.mkdir(parents=True, exist_ok=True)

            # 所有日志
            loguru_logger.add(
                self.log_path / 'radar_{time:YYYY-MM-DD}.log',
                format=_FILE_FORMAT,
                level=log_level,
                rotation=rotation,
                retention=retention,
                encoding='utf-8'
            )

            # 错误日志
            loguru_logger.add(
                self.log_path / 'radar_error_{time:YYYY-MM-DD}.log',
                format=_FILE_FORMAT,
                level='ERROR',
                rotation=rotation,
                retention=retention,
                encoding='utf-8'
            )

        self._logger = loguru_logger

    def get_logger(self, component: str = 'radar'):
        """获取绑定组件名的logger实例"""
        return self._logger.bind(component=component)


# 全局日志实例
_radar_logger: Optional[RadarLogger] = None


def get_logger(component: str = 'radar'):
    """
    获取组件logger

    日志系统未初始化时使用loguru默认处理器。

    Args:
        component: 组件名称，输出到日志的component字段

    Returns:
        绑定了组件名的loguru logger
    """
    if _radar_logger is not None:
        return _radar_logger.get_logger(component)
    return loguru_logger.bind(component=component)


def init_logger(
    log_path: str = './logs',
    log_level: str = 'INFO',
    enable_console: bool = True,
    enable_file: bool = True
) -> RadarLogger:
    """初始化全局日志系统"""
    global _radar_logger
    _radar_logger = RadarLogger(
        log_path=log_path,
        log_level=log_level,
        enable_console=enable_console,
        enable_file=enable_file
    )
    return _radar_logger


__all__ = [
    'RadarLogger',
    'get_logger',
    'init_logger',
]
