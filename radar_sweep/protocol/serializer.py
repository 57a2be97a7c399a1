# serializer.py - 消息序列化
"""
本模块提供消息的序列化和反序列化功能。

支持两种序列化格式：
- JSON: 文本格式，易于调试，使用orjson实现高性能
- MessagePack: 二进制格式，更紧凑
"""

from enum import Enum
from typing import Type, TypeVar, Any, Dict, Union
from dataclasses import fields, is_dataclass

import msgpack
import numpy as np
import orjson

from radar_sweep.common.exceptions import ProtocolError
from radar_sweep.protocol.messages import BaseMessage, MESSAGE_CLASSES

T = TypeVar('T', bound=BaseMessage)


def _wire_name(field_info) -> str:
    return field_info.metadata.get('wire', field_info.name)


class MessageSerializer:
    """
    消息序列化器

    dataclass 字段按元数据中的线上名称输出，枚举输出其值，
    numpy 标量和数组转换为Python原生类型。
    """

    def __init__(self, format: str = 'json'):
        """
        初始化序列化器

        Args:
            format: 序列化格式 ('json' 或 'msgpack')
        """
        if format not in ['json', 'msgpack']:
            raise ValueError(f"不支持的序列化格式: {format}")

        self.format = format

    @property
    def is_binary(self) -> bool:
        return self.format == 'msgpack'

    def serialize(self, message: BaseMessage) -> bytes:
        """
        序列化消息为字节

        Raises:
            ProtocolError: 如果序列化失败
        """
        data_dict = self.to_dict(message)
        try:
            if self.format == 'json':
                return orjson.dumps(data_dict)
            return msgpack.packb(data_dict, use_bin_type=True)
        except (TypeError, ValueError, orjson.JSONEncodeError) as e:
            raise ProtocolError(f"序列化失败: {e}")

    def deserialize(self, data: Union[bytes, str], message_class: Type[T]) -> T:
        """
        反序列化字节为指定类型的消息对象

        Raises:
            ProtocolError: 如果反序列化失败
        """
        data_dict = self._load(data)
        return self.from_dict(data_dict, message_class)

    def decode(self, data: Union[bytes, str]) -> BaseMessage:
        """
        按 type 字段反序列化为对应的消息对象

        Raises:
            ProtocolError: 数据无法解析或消息类型未知
        """
        data_dict = self._load(data)
        if not isinstance(data_dict, dict):
            raise ProtocolError(f"消息必须是对象, 得到: {type(data_dict).__name__}")
        msg_type = data_dict.get('type')
        message_class = MESSAGE_CLASSES.get(msg_type)
        if message_class is None:
            raise ProtocolError(f"未知消息类型: {msg_type}")
        return self.from_dict(data_dict, message_class)

    def to_dict(self, obj: Any) -> Any:
        """
        递归转换dataclass为字典

        Args:
            obj: 要转换的对象

        Returns:
            转换后的字典或基本类型
        """
        if is_dataclass(obj):
            return {
                _wire_name(field_info): self.to_dict(getattr(obj, field_info.name))
                for field_info in fields(obj)
            }

        elif isinstance(obj, Enum):
            return obj.value

        elif isinstance(obj, np.ndarray):
            return obj.tolist()

        elif isinstance(obj, np.integer):
            return int(obj)

        elif isinstance(obj, np.floating):
            return float(obj)

        elif isinstance(obj, (list, tuple)):
            return [self.to_dict(item) for item in obj]

        elif isinstance(obj, dict):
            return {k: self.to_dict(v) for k, v in obj.items()}

        else:
            return obj

    def from_dict(self, data: Dict, cls: Type[T]) -> T:
        """
        从字典创建dataclass对象，忽略未知字段

        Raises:
            ProtocolError: 数据不是对象或字段无法构造
        """
        if not isinstance(data, dict):
            raise ProtocolError(f"消息必须是对象, 得到: {type(data).__name__}")

        kwargs = {}
        for field_info in fields(cls):
            key = _wire_name(field_info)
            if key in data:
                kwargs[field_info.name] = self._convert_value(data[key], field_info.type)

        try:
            return cls(**kwargs)
        except TypeError as e:
            raise ProtocolError(f"消息字段非法: {e}")

    def _convert_value(self, value: Any, field_type: Any) -> Any:
        origin = getattr(field_type, '__origin__', None)

        # Optional[T] = Union[T, None]
        if origin is Union:
            if value is None:
                return None
            for arg in field_type.__args__:
                if arg is not type(None):
                    return self._convert_value(value, arg)

        elif origin is list:
            if not isinstance(value, list):
                return value
            args = getattr(field_type, '__args__', ())
            if args:
                return [self._convert_value(v, args[0]) for v in value]
            return value

        elif isinstance(field_type, type) and is_dataclass(field_type):
            if isinstance(value, dict):
                return self.from_dict(value, field_type)
            return value

        elif isinstance(field_type, type) and issubclass(field_type, Enum):
            return field_type(value)

        return value

    def _load(self, data: Union[bytes, str]) -> Dict:
        try:
            if self.format == 'json':
                return orjson.loads(data)
            return msgpack.unpackb(data, raw=False)
        except (orjson.JSONDecodeError, ValueError, TypeError, msgpack.ExtraData) as e:
            raise ProtocolError(f"反序列化失败: {e}")


__all__ = [
    "MessageSerializer",
]
