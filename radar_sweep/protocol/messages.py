# messages.py - 通信协议消息定义
"""
本模块定义后端与显示端通信的消息结构。

所有消息都是带类型标签的对象：
- 初始状态消息：新连接建立时发送一次，携带探测扇区静态参数
- 更新消息：每个tick广播，携带当前波束方位角和探测到的飞行器
- 查询消息：显示端按飞行器标识请求机型信息

字段的线上名称（camelCase）通过 dataclass 字段元数据 'wire' 声明。
"""

from dataclasses import dataclass, field
from typing import List, Dict, Type
from datetime import datetime

from radar_sweep.common.types import Position3D


def wire_field(name: str, **kwargs):
    """声明线上名称与属性名不同的字段"""
    metadata = dict(kwargs.pop('metadata', {}))
    metadata['wire'] = name
    return field(metadata=metadata, **kwargs)


# ============================================================================
# 消息类型
# ============================================================================

class MessageType:
    """消息类型常量"""
    # 后端->显示端
    INITIAL_RADAR_STATE = "initial_radar_state"
    RADAR_UPDATE = "radar_update"
    AIRCRAFT_INFO = "aircraft_info"

    # 显示端->后端
    INSPECT = "inspect"


# ============================================================================
# 基础消息类
# ============================================================================

@dataclass
class BaseMessage:
    """
    消息基类

    Attributes:
        type: 消息类型
        timestamp: 时间戳 [微秒]
        sequence_id: 序列号，更新消息为tick序号
    """
    type: str
    timestamp: int = field(default_factory=lambda: int(datetime.now().timestamp() * 1e6))
    sequence_id: int = 0


# ============================================================================
# 载荷
# ============================================================================

@dataclass
class RadarStatePayload:
    """探测扇区静态参数"""
    detection_range: float = wire_field('detectionRange', default=0.0)
    sweep_width: float = wire_field('sweepWidth', default=0.0)
    max_elevation: float = wire_field('maxElevation', default=0.0)


@dataclass
class AircraftPayload:
    """
    单架飞行器的探测结果

    Attributes:
        id: 飞行器标识
        type: 类别标签
        distance: 距离
        azimuth: 方位角 [度]
        elevation: 俯仰角 [度]
        position: 笛卡尔位置
    """
    id: str = ""
    type: str = "Unknown"
    distance: float = 0.0
    azimuth: float = 0.0
    elevation: float = 0.0
    position: Position3D = field(default_factory=lambda: Position3D(0.0, 0.0, 0.0))

    @classmethod
    def from_state(cls, state) -> 'AircraftPayload':
        """从 AircraftState 快照创建"""
        return cls(
            id=state.id,
            type=state.type.value,
            distance=state.distance,
            azimuth=state.azimuth,
            elevation=state.elevation,
            position=state.position,
        )


@dataclass
class RadarUpdatePayload:
    """每个tick的广播内容"""
    current_radar_azimuth: float = wire_field('currentRadarAzimuth', default=0.0)
    current_aircrafts: List[AircraftPayload] = wire_field('currentAircrafts', default_factory=list)


@dataclass
class AircraftInfoPayload:
    """机型信息查询结果"""
    aircraft_id: str = wire_field('aircraftId', default="")
    image: str = ""
    name: str = ""
    type: str = ""
    class_name: str = wire_field('class', default="")


# ============================================================================
# 消息
# ============================================================================

@dataclass
class InitialRadarStateMessage(BaseMessage):
    """新连接的初始状态消息"""
    type: str = MessageType.INITIAL_RADAR_STATE
    payload: RadarStatePayload = field(default_factory=RadarStatePayload)


@dataclass
class RadarUpdateMessage(BaseMessage):
    """周期广播的更新消息"""
    type: str = MessageType.RADAR_UPDATE
    payload: RadarUpdatePayload = field(default_factory=RadarUpdatePayload)


@dataclass
class InspectRequest(BaseMessage):
    """
    机型信息查询

    Args:
        aircraft_id: 要查询的飞行器标识
    """
    type: str = MessageType.INSPECT
    aircraft_id: str = wire_field('aircraftId', default="")


@dataclass
class AircraftInfoMessage(BaseMessage):
    """机型信息响应"""
    type: str = MessageType.AIRCRAFT_INFO
    payload: AircraftInfoPayload = field(default_factory=AircraftInfoPayload)


MESSAGE_CLASSES: Dict[str, Type[BaseMessage]] = {
    MessageType.INITIAL_RADAR_STATE: InitialRadarStateMessage,
    MessageType.RADAR_UPDATE: RadarUpdateMessage,
    MessageType.INSPECT: InspectRequest,
    MessageType.AIRCRAFT_INFO: AircraftInfoMessage,
}


__all__ = [
    "MessageType",
    "BaseMessage",
    "RadarStatePayload",
    "AircraftPayload",
    "RadarUpdatePayload",
    "AircraftInfoPayload",
    "InitialRadarStateMessage",
    "RadarUpdateMessage",
    "InspectRequest",
    "AircraftInfoMessage",
    "MESSAGE_CLASSES",
    "wire_field",
]
