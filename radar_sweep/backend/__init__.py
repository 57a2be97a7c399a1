# backend - 后端模块
"""
后端模块：
- environment: 飞行器与编队生成
- sensor: 旋转探测扇区
- core: 世界状态、时间管理、广播驱动
- network: WebSocket实时分发
- catalog: 机型信息目录
"""
