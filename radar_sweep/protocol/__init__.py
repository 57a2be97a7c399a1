# protocol - 通信协议模块
"""
通信协议模块定义后端与显示端通信的消息格式和序列化方式。

包括：
- messages: 消息类型定义
- serializer: 消息序列化/反序列化
"""

from radar_sweep.protocol.messages import (
    MessageType,
    BaseMessage,
    RadarStatePayload,
    AircraftPayload,
    RadarUpdatePayload,
    AircraftInfoPayload,
    InitialRadarStateMessage,
    RadarUpdateMessage,
    InspectRequest,
    AircraftInfoMessage,
)
from radar_sweep.protocol.serializer import (
    MessageSerializer,
)

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
    "MessageSerializer",
]
