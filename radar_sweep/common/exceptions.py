# 异常定义模块 (Exception Definitions Module)
# 本模块定义雷达扫描仿真系统中使用的所有自定义异常

from typing import Optional


class RadarError(Exception):
    """
    雷达系统基础异常类 (Base Radar Exception Class)

    所有雷达系统自定义异常的基类
    """

    def __init__(self, message: str, error_code: Optional[int] = None):
        """
        初始化异常

        Args:
            message: 错误信息
            error_code: 错误码（可选）
        """
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.error_code is not None:
            return f'[Error {self.error_code}] {self.message}'
        return self.message


class ConfigError(RadarError):
    """配置异常 (Configuration Error)"""
    pass


class NetworkError(RadarError):
    """网络通信异常 (Network Communication Error)"""
    pass


class ProtocolError(RadarError):
    """协议异常 (Protocol Error)"""
    pass


class SimulationError(RadarError):
    """仿真异常 (Simulation Error)"""
    pass


class CatalogError(RadarError):
    """机型目录异常 (Aircraft Catalog Error)"""

    def __init__(self, message: str, source: Optional[str] = None):
        """
        初始化目录异常

        Args:
            message: 错误信息
            source: 目录数据来源（如文件路径）
        """
        self.source = source
        full_message = f'{source}: {message}' if source else message
        super().__init__(full_message)


# ==================== 导出所有异常 ====================

__all__ = [
    'RadarError',
    'ConfigError',
    'NetworkError',
    'ProtocolError',
    'SimulationError',
    'CatalogError',
]
