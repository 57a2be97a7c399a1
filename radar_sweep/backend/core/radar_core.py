# radar_core.py - 雷达核心控制器
"""
本模块实现扫描雷达的广播驱动。

RadarCore 是唯一修改仿真状态的一方，负责：
- 按固定周期推进世界状态（固定逻辑步长，与实际流逝时间无关）
- 计算被探测到的飞行器并组装更新消息
- 将更新消息交给网络层广播
- 为新连接生成初始状态消息、应答机型查询

状态机: IDLE（无定时任务） -> RUNNING（周期任务运行中）
"""

import asyncio
from typing import Optional

from radar_sweep.common.logger import get_logger
from radar_sweep.common.types import SystemState
from radar_sweep.backend.catalog.metadata_catalog import MetadataCatalog
from radar_sweep.backend.core.time_manager import TimeManager
from radar_sweep.backend.core.world import World
from radar_sweep.backend.network.network_manager import NetworkManager
from radar_sweep.protocol.messages import (
    AircraftInfoMessage, AircraftInfoPayload, AircraftPayload,
    InitialRadarStateMessage, InspectRequest, RadarStatePayload,
    RadarUpdateMessage, RadarUpdatePayload,
)


class RadarCore:
    """
    雷达核心控制器

    持有 World 的唯一引用，周期推进并广播探测结果。
    """

    def __init__(self,
                 world: World,
                 time_manager: TimeManager,
                 network: Optional[NetworkManager] = None,
                 catalog: Optional[MetadataCatalog] = None):
        """
        初始化雷达核心

        Args:
            world: 仿真世界
            time_manager: 固定步长时间管理器
            network: 网络管理器，None则只推进不广播
            catalog: 机型信息目录，None则不应答查询
        """
        self._logger = get_logger("radar_core")
        self._world = world
        self._time_manager = time_manager
        self._network = network
        self._catalog = catalog

        self._state = SystemState.IDLE
        self._task: Optional[asyncio.Task] = None

        if network is not None:
            network.set_connect_handler(self.initial_state_message)
            network.set_inspect_handler(self.handle_inspect)

    @property
    def world(self) -> World:
        return self._world

    @property
    def network(self) -> Optional[NetworkManager]:
        return self._network

    @property
    def time_manager(self) -> TimeManager:
        return self._time_manager

    def get_state(self) -> SystemState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == SystemState.RUNNING

    # ==================== 消息 ====================

    def initial_state_message(self) -> InitialRadarStateMessage:
        """新连接的初始状态：探测扇区静态参数"""
        params = self._world.sensor_parameters()
        return InitialRadarStateMessage(
            payload=RadarStatePayload(
                detection_range=params.detection_range,
                sweep_width=params.sweep_width,
                max_elevation=params.max_elevation,
            )
        )

    def handle_inspect(self, request: InspectRequest) -> Optional[AircraftInfoMessage]:
        """
        应答机型查询

        Returns:
            查询结果消息；未配置目录时返回None
        """
        if self._catalog is None:
            return None

        info = self._catalog.lookup_aircraft(request.aircraft_id)
        if info.is_empty:
            self._logger.info(f"机型查询无结果: {request.aircraft_id}")

        return AircraftInfoMessage(
            payload=AircraftInfoPayload(
                aircraft_id=request.aircraft_id,
                image=info.image,
                name=info.name,
                type=info.type,
                class_name=info.class_name,
            )
        )

    # ==================== 推进 ====================

    def step(self) -> RadarUpdateMessage:
        """
        推进一个tick并生成更新消息

        Returns:
            本tick的更新消息
        """
        delta = self._time_manager.advance_frame()
        self._world.tick(delta)

        detected = self._world.detected_aircraft()
        message = RadarUpdateMessage(
            sequence_id=self._time_manager.frame_count,
            payload=RadarUpdatePayload(
                current_radar_azimuth=self._world.radar_azimuth(),
                current_aircrafts=[AircraftPayload.from_state(s) for s in detected],
            )
        )

        self._logger.debug(
            f"tick {message.sequence_id}: azimuth={message.payload.current_radar_azimuth:.2f}, "
            f"detected={len(detected)}"
        )
        return message

    async def broadcast_step(self) -> RadarUpdateMessage:
        """推进一个tick并广播"""
        message = self.step()
        if self._network is not None:
            await self._network.broadcast(message)
        return message

    async def _run_loop(self) -> None:
        """周期主循环"""
        while self._state == SystemState.RUNNING:
            try:
                await self.broadcast_step()
            except Exception:
                # 丢弃本tick，下一tick照常进行
                self._logger.exception(f"tick {self._time_manager.frame_count} 执行失败")
            await self._time_manager.wait_for_frame()

    async def start(self) -> None:
        """IDLE -> RUNNING"""
        if self._state == SystemState.RUNNING:
            self._logger.warning("广播循环已在运行")
            return

        self._state = SystemState.RUNNING
        self._time_manager.start()
        self._task = asyncio.create_task(self._run_loop())
        self._logger.info(
            f"广播循环已启动: {len(self._world)} 架飞行器, "
            f"周期 {self._time_manager.tick_interval}s"
        )

    async def stop(self) -> None:
        """RUNNING -> IDLE"""
        if self._state != SystemState.RUNNING:
            return

        self._state = SystemState.IDLE
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        self._time_manager.stop()
        self._logger.info("广播循环已停止")


__all__ = [
    "RadarCore",
]
