# network - 网络通信模块
from radar_sweep.backend.network.network_manager import ClientSession, NetworkManager

__all__ = [
    "ClientSession",
    "NetworkManager",
]
