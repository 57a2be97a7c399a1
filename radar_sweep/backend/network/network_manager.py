# network_manager.py - 网络管理器
"""
本模块实现探测结果的WebSocket实时分发。

网络通信负责：
- WebSocket服务器
- 会话管理
- 新连接的初始状态下发
- 周期数据广播（尽力而为，不排队、不重发）
"""

import asyncio
import uuid
from typing import Callable, Dict, Optional, Union, Any
from dataclasses import dataclass, field
from datetime import datetime

from fastapi import FastAPI, WebSocket
from fastapi.websockets import WebSocketDisconnect, WebSocketState

from radar_sweep.common.exceptions import NetworkError, ProtocolError
from radar_sweep.common.logger import get_logger
from radar_sweep.protocol.messages import BaseMessage, InspectRequest
from radar_sweep.protocol.serializer import MessageSerializer


ConnectHandler = Callable[[], BaseMessage]
InspectHandler = Callable[[InspectRequest], Optional[BaseMessage]]


@dataclass
class ClientSession:
    """
    客户端会话

    Attributes:
        websocket: WebSocket连接
        session_id: 会话ID
        connected_time: 连接时间
        pending_send: 尚未完成的广播发送任务
    """
    websocket: WebSocket
    session_id: str
    connected_time: datetime = field(default_factory=datetime.now)
    pending_send: Optional[asyncio.Task] = None

    @property
    def is_writable(self) -> bool:
        """连接处于打开状态且上一次广播已发送完成"""
        if self.pending_send is not None and not self.pending_send.done():
            return False
        return (self.websocket.client_state == WebSocketState.CONNECTED and
                self.websocket.application_state == WebSocketState.CONNECTED)


class NetworkManager:
    """
    网络管理器

    管理所有显示端连接，向其广播探测结果。
    """

    def __init__(self, host: str = "0.0.0.0", port: int = 3000,
                 path: str = "/", format: str = 'json'):
        """
        初始化网络管理器

        Args:
            host: 服务器地址
            port: 服务器端口
            path: WebSocket端点路径
            format: 序列化格式 ('json' 或 'msgpack')
        """
        self._logger = get_logger("network")
        self._host = host
        self._port = port
        self._path = path
        self._serializer = MessageSerializer(format)

        # FastAPI应用
        self._app = FastAPI(title="Radar Sweep Backend")
        self._server = None

        # 连接管理
        self._sessions: Dict[str, ClientSession] = {}

        # 回调函数
        self._connect_handler: Optional[ConnectHandler] = None
        self._inspect_handler: Optional[InspectHandler] = None

        # 统计信息
        self._stats = {
            'total_connections': 0,
            'active_connections': 0,
            'failed_handshakes': 0,
            'messages_sent': 0,
            'messages_skipped': 0,
            'messages_received': 0,
            'send_failures': 0,
        }

        self._setup_routes()

    def _setup_routes(self) -> None:
        """设置WebSocket路由"""
        self._logger.info(f"设置WebSocket端点: {self._path}")

        @self._app.websocket(self._path)
        async def websocket_endpoint(websocket: WebSocket):
            """WebSocket端点"""
            await self._handle_websocket(websocket)

    @property
    def sessions(self) -> Dict[str, ClientSession]:
        return dict(self._sessions)

    async def _handle_websocket(self, websocket: WebSocket) -> None:
        """
        处理WebSocket连接

        初始状态发送成功后才加入广播集合，保证初始状态先于周期数据到达。
        """
        session_id = f"session_{uuid.uuid4().hex[:12]}"

        await websocket.accept()
        session = ClientSession(websocket=websocket, session_id=session_id)
        self._stats['total_connections'] += 1

        if not await self._send_initial_state(session):
            self._stats['failed_handshakes'] += 1
            return

        self.register_session(session)

        try:
            await self._message_loop(session)
        except WebSocketDisconnect:
            self._logger.info(f"WebSocket断开: {session_id}")
        finally:
            self._drop_session(session_id)

    async def _send_initial_state(self, session: ClientSession) -> bool:
        """
        发送初始状态

        Returns:
            是否发送成功
        """
        if self._connect_handler is None:
            return True

        try:
            message = self._connect_handler()
            await self._send(session.websocket, self._encode(message))
            return True
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            self._logger.warning(f"初始状态发送失败: {session.session_id}: {e}")
            return False

    async def _message_loop(self, session: ClientSession) -> None:
        """
        消息处理循环

        Raises:
            WebSocketDisconnect: 连接断开
        """
        while True:
            event = await session.websocket.receive()
            if event['type'] == 'websocket.disconnect':
                raise WebSocketDisconnect(event.get('code', 1000))

            data = event.get('text')
            if data is None:
                data = event.get('bytes')
            if data is None:
                continue

            self._stats['messages_received'] += 1

            try:
                message = self._serializer.decode(data)
            except ProtocolError as e:
                self._logger.error(f"消息解析失败: {session.session_id}: {e}")
                continue

            await self._handle_client_message(session, message)

    async def _handle_client_message(self, session: ClientSession,
                                     message: BaseMessage) -> None:
        """
        处理客户端消息

        Args:
            session: 客户端会话
            message: 已解析的消息
        """
        self._logger.debug(f"收到消息: {message.type} ({session.session_id})")

        if isinstance(message, InspectRequest):
            if self._inspect_handler is None:
                self._logger.debug(f"未配置查询处理器, 忽略: {message.aircraft_id}")
                return

            reply = self._inspect_handler(message)
            if reply is not None:
                await self._send(session.websocket, self._encode(reply))

        else:
            self._logger.warning(f"不支持的消息类型: {message.type}")

    def register_session(self, session: ClientSession) -> None:
        """将会话加入广播集合"""
        self._sessions[session.session_id] = session
        self._stats['active_connections'] = len(self._sessions)
        self._logger.info(f"新WebSocket连接: {session.session_id}, 当前连接数: {len(self._sessions)}")

    def _drop_session(self, session_id: str) -> None:
        """从广播集合中移除会话"""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return

        self._stats['active_connections'] = len(self._sessions)
        self._logger.info(f"会话清理: {session_id}, 当前连接数: {len(self._sessions)}")

    def _encode(self, message: BaseMessage) -> Union[str, bytes]:
        data = self._serializer.serialize(message)
        if self._serializer.is_binary:
            return data
        return data.decode('utf-8')

    async def _send(self, websocket: WebSocket, data: Union[str, bytes]) -> None:
        if isinstance(data, bytes):
            await websocket.send_bytes(data)
        else:
            await websocket.send_text(data)

    async def _deliver(self, session: ClientSession, data: Union[str, bytes]) -> None:
        """向单个会话发送广播数据，失败则移除该会话"""
        try:
            await self._send(session.websocket, data)
            self._stats['messages_sent'] += 1
        except Exception as e:
            self._stats['send_failures'] += 1
            self._logger.warning(f"发送失败, 移除会话 {session.session_id}: {e}")
            self._drop_session(session.session_id)

    async def broadcast(self, message: BaseMessage) -> int:
        """
        广播消息到所有可写的客户端

        每个会话的发送相互独立，不等待发送完成；
        上一次发送仍未完成或连接不可写的会话本次直接跳过。

        Args:
            message: 要广播的消息

        Returns:
            本次发起发送的会话数
        """
        if not self._sessions:
            return 0

        data = self._encode(message)

        scheduled = 0
        for session in list(self._sessions.values()):
            if not session.is_writable:
                self._stats['messages_skipped'] += 1
                continue

            session.pending_send = asyncio.create_task(self._deliver(session, data))
            scheduled += 1

        return scheduled

    async def drain(self) -> None:
        """等待所有进行中的发送完成"""
        pending = [
            s.pending_send for s in list(self._sessions.values())
            if s.pending_send is not None and not s.pending_send.done()
        ]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    def set_connect_handler(self, handler: ConnectHandler) -> None:
        """设置新连接初始状态生成器"""
        self._connect_handler = handler

    def set_inspect_handler(self, handler: InspectHandler) -> None:
        """设置机型查询处理器"""
        self._inspect_handler = handler

    async def start(self) -> None:
        """
        启动网络服务（阻塞直到服务器退出）

        Raises:
            NetworkError: 端口绑定失败
        """
        import uvicorn

        self._logger.info(f"启动网络服务器: ws://{self._host}:{self._port}{self._path}")

        config = uvicorn.Config(
            app=self._app,
            host=self._host,
            port=self._port,
            log_level="warning"
        )

        self._server = uvicorn.Server(config)
        # 绑定失败时uvicorn记录错误后调用sys.exit(1)
        try:
            await self._server.serve()
        except (OSError, SystemExit) as e:
            raise NetworkError(f"网络服务器启动失败: {self._host}:{self._port}: {e}")

    async def stop(self) -> None:
        """停止网络服务"""
        self._logger.info("停止网络服务器...")

        for session in list(self._sessions.values()):
            if session.pending_send is not None:
                session.pending_send.cancel()
            try:
                await session.websocket.close()
            except RuntimeError as e:
                self._logger.debug(f"关闭连接: {session.session_id}: {e}")

        self._sessions.clear()
        self._stats['active_connections'] = 0

        if self._server is not None:
            self._server.should_exit = True

    def get_app(self) -> FastAPI:
        """获取FastAPI应用"""
        return self._app

    def get_statistics(self) -> Dict[str, Any]:
        """获取统计信息"""
        return {
            **self._stats,
            'sessions': len(self._sessions),
        }


__all__ = [
    "ClientSession",
    "NetworkManager",
]
