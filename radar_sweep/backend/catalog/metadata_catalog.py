# metadata_catalog.py - 机型信息目录
"""
本模块定义机型信息目录的接口。

目录是外部的只读数据源，按去掉实例后缀的机型名称查询，
返回图片、显示名称、类别和机型分类；未知机型返回空记录。
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional

import orjson

from radar_sweep.common.exceptions import CatalogError
from radar_sweep.common.logger import get_logger
from radar_sweep.backend.environment.population import INSTANCE_SEPARATOR


def catalog_name(aircraft_id: str) -> str:
    """
    去掉飞行器标识中的实例后缀

    Example:
        "F-16D Instance: 12" -> "F-16D"
    """
    return aircraft_id.split(INSTANCE_SEPARATOR, 1)[0].strip()


@dataclass(frozen=True)
class AircraftInfo:
    """
    机型信息记录

    Attributes:
        image: 图片引用
        name: 显示名称
        type: 类别
        class_name: 机型分类（直升机、固定翼等）
    """
    image: str = ""
    name: str = ""
    type: str = ""
    class_name: str = ""

    @classmethod
    def empty(cls) -> 'AircraftInfo':
        """查询失败时返回的空记录"""
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.name


class MetadataCatalog:
    """机型信息目录接口"""

    def lookup(self, name: str) -> AircraftInfo:
        """按机型名称查询，未知机型返回空记录"""
        raise NotImplementedError

    def lookup_aircraft(self, aircraft_id: str) -> AircraftInfo:
        """按飞行器标识查询"""
        return self.lookup(catalog_name(aircraft_id))


class StaticMetadataCatalog(MetadataCatalog):
    """
    内存机型目录

    数据可来自JSON文件，文件内容为记录列表：
    [{"name": "F-16D", "image": "...", "type": "Military", "class": "Plane"}, ...]
    """

    def __init__(self, records: Iterable[AircraftInfo] = ()):
        self._logger = get_logger("catalog")
        self._records: Dict[str, AircraftInfo] = {}
        for record in records:
            self._records[record.name] = record

    @classmethod
    def from_file(cls, path: str) -> 'StaticMetadataCatalog':
        """
        从JSON文件加载目录

        Raises:
            CatalogError: 文件不存在或格式非法
        """
        file_path = Path(path)
        if not file_path.exists():
            raise CatalogError("目录文件不存在", source=str(file_path))

        try:
            data = orjson.loads(file_path.read_bytes())
        except orjson.JSONDecodeError as e:
            raise CatalogError(f"JSON解析失败: {e}", source=str(file_path))

        if not isinstance(data, list):
            raise CatalogError("目录文件必须是记录列表", source=str(file_path))

        records = []
        for entry in data:
            if not isinstance(entry, dict) or 'name' not in entry:
                raise CatalogError(f"目录记录缺少name字段: {entry}", source=str(file_path))
            records.append(AircraftInfo(
                image=entry.get('image', ''),
                name=entry['name'],
                type=entry.get('type', ''),
                class_name=entry.get('class', ''),
            ))

        catalog = cls(records)
        catalog._logger.info(f"机型目录已加载: {len(records)} 条记录 ({file_path})")
        return catalog

    def lookup(self, name: str) -> AircraftInfo:
        info = self._records.get(name)
        if info is None:
            self._logger.debug(f"未知机型: {name}")
            return AircraftInfo.empty()
        return info

    def __len__(self) -> int:
        return len(self._records)


def load_catalog(path: Optional[str]) -> Optional[MetadataCatalog]:
    """根据配置路径加载目录，未配置时返回None"""
    if not path:
        return None
    return StaticMetadataCatalog.from_file(path)


__all__ = [
    "catalog_name",
    "AircraftInfo",
    "MetadataCatalog",
    "StaticMetadataCatalog",
    "load_catalog",
]
