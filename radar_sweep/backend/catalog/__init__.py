# catalog - 机型信息目录模块
from radar_sweep.backend.catalog.metadata_catalog import (
    catalog_name, AircraftInfo, MetadataCatalog, StaticMetadataCatalog, load_catalog
)

__all__ = [
    "catalog_name",
    "AircraftInfo",
    "MetadataCatalog",
    "StaticMetadataCatalog",
    "load_catalog",
]
