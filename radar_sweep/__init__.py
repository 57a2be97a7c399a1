# Radar Sweep - 旋转扫描雷达仿真
# 版本: 1.0
# 技术栈: Python 3.10+
"""
旋转扫描雷达仿真 - 后端系统

本模块实现旋转扫描雷达的仿真与检测引擎，包括：
- 环境模拟：飞行器方位角运动、极坐标到笛卡尔坐标转换
- 探测扇区：波束方位旋转、距离/俯仰/方位窗口检测
- 世界状态：飞行器编队与探测扇区的统一推进
- 网络通信：WebSocket实时广播探测结果

作者: Radar Development Team
许可: MIT License
"""

__version__ = "1.0.0"
__author__ = "Radar Development Team"
