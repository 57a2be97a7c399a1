# time_manager.py - 时间管理器
"""
本模块实现固定步长的仿真时钟。

仿真采用与实际流逝时间解耦的固定步长模型：
- 每帧（tick）的实际间隔由 tick_interval 决定
- 每帧推进的逻辑时间固定为 tick_delta，不测量实际经过的时间
"""

import asyncio
from typing import Optional
from datetime import datetime

from radar_sweep.common.logger import get_logger


class TimeManager:
    """
    固定步长时间管理器

    记录帧计数和累计的逻辑仿真时间。
    """

    def __init__(self, tick_interval: float, tick_delta: float):
        """
        初始化时间管理器

        Args:
            tick_interval: 帧间隔 [秒]
            tick_delta: 每帧逻辑时间步长
        """
        self._logger = get_logger("time_manager")

        self._tick_interval = tick_interval
        self._tick_delta = tick_delta

        # 逻辑仿真时间
        self._simulation_time = 0.0

        # 实际时间基准
        self._real_start_time: Optional[datetime] = None

        # 帧计数
        self._frame_count = 0

        # 下一帧的事件循环时间
        self._next_frame_time: Optional[float] = None

        self._is_running = False

        self._logger.info(f"时间管理器初始化: interval={tick_interval}s, delta={tick_delta}")

    @property
    def tick_interval(self) -> float:
        """帧间隔 [秒]"""
        return self._tick_interval

    @property
    def tick_delta(self) -> float:
        """每帧逻辑时间步长"""
        return self._tick_delta

    @property
    def simulation_time(self) -> float:
        """累计逻辑仿真时间"""
        return self._simulation_time

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def is_running(self) -> bool:
        return self._is_running

    def start(self) -> None:
        """开始时间管理"""
        self._is_running = True
        self._real_start_time = datetime.now()
        self._next_frame_time = None
        self._logger.info("时间管理器已启动")

    def stop(self) -> None:
        """停止时间管理"""
        self._is_running = False
        elapsed = self.get_elapsed_real_time()
        self._logger.info(f"时间管理器已停止. 运行时间: {elapsed:.2f}秒, 帧数: {self._frame_count}")

    def advance_frame(self) -> float:
        """
        推进一帧

        Returns:
            本帧的逻辑时间步长
        """
        self._simulation_time += self._tick_delta
        self._frame_count += 1
        return self._tick_delta

    def reset(self) -> None:
        """重置时间"""
        self._simulation_time = 0.0
        self._frame_count = 0
        self._logger.info("时间已重置")

    def get_elapsed_real_time(self) -> float:
        """从启动到现在的实际时间 [秒]"""
        if self._real_start_time is None:
            return 0.0
        return (datetime.now() - self._real_start_time).total_seconds()

    async def wait_for_frame(self) -> None:
        """
        等待下一帧

        按固定节拍等待，扣除本帧已用去的时间；落后超过一帧时重新对齐节拍，不补帧。
        """
        loop = asyncio.get_running_loop()
        now = loop.time()
        if self._next_frame_time is None:
            self._next_frame_time = now
        self._next_frame_time += self._tick_interval
        if self._next_frame_time < now:
            self._next_frame_time = now
        await asyncio.sleep(self._next_frame_time - now)

    def __repr__(self) -> str:
        return (f"TimeManager(sim_time={self._simulation_time:.3f}, "
                f"interval={self._tick_interval}s, frame={self._frame_count})")


__all__ = [
    "TimeManager",
]
