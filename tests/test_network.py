# 网络模块测试

import asyncio
import orjson
import pytest
import sys
sys.path.insert(0, '.')

from fastapi.testclient import TestClient
from fastapi.websockets import WebSocketState

from radar_sweep.backend.catalog.metadata_catalog import AircraftInfo, StaticMetadataCatalog
from radar_sweep.backend.core.radar_core import RadarCore
from radar_sweep.backend.core.time_manager import TimeManager
from radar_sweep.backend.core.world import World
from radar_sweep.backend.network.network_manager import ClientSession, NetworkManager
from radar_sweep.common.exceptions import NetworkError
from radar_sweep.protocol.messages import RadarUpdateMessage, RadarUpdatePayload


class FakeWebSocket:
    """记录发送内容的WebSocket替身"""

    def __init__(self, fail: bool = False, gate: asyncio.Event = None):
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED
        self.sent = []
        self.fail = fail
        self.gate = gate
        self.accepted = False

    async def accept(self) -> None:
        self.accepted = True

    async def send_text(self, data: str) -> None:
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise RuntimeError("connection reset")
        self.sent.append(orjson.loads(data))

    async def send_bytes(self, data: bytes) -> None:
        self.sent.append(data)

    async def close(self) -> None:
        self.client_state = WebSocketState.DISCONNECTED


def _update(seq: int) -> RadarUpdateMessage:
    return RadarUpdateMessage(sequence_id=seq, payload=RadarUpdatePayload(current_radar_azimuth=float(seq)))


def _register(manager: NetworkManager, session_id: str, **kwargs) -> FakeWebSocket:
    ws = FakeWebSocket(**kwargs)
    manager.register_session(ClientSession(websocket=ws, session_id=session_id))
    return ws


class TestBroadcast:
    """广播测试"""

    @pytest.mark.asyncio
    async def test_broadcast_to_all(self):
        """所有可写会话都收到消息"""
        manager = NetworkManager()
        a = _register(manager, 'a')
        b = _register(manager, 'b')

        assert await manager.broadcast(_update(1)) == 2
        await manager.drain()

        assert [m['sequence_id'] for m in a.sent] == [1]
        assert [m['sequence_id'] for m in b.sent] == [1]
        assert manager.get_statistics()['messages_sent'] == 2

    @pytest.mark.asyncio
    async def test_broadcast_without_sessions(self):
        manager = NetworkManager()
        assert await manager.broadcast(_update(1)) == 0

    @pytest.mark.asyncio
    async def test_not_writable_skipped(self):
        """连接未打开的会话本次跳过，不排队"""
        manager = NetworkManager()
        ready = _register(manager, 'ready')
        closing = _register(manager, 'closing')
        closing.application_state = WebSocketState.CONNECTING

        await manager.broadcast(_update(1))
        await manager.drain()

        closing.application_state = WebSocketState.CONNECTED
        await manager.broadcast(_update(2))
        await manager.drain()

        assert [m['sequence_id'] for m in ready.sent] == [1, 2]
        assert [m['sequence_id'] for m in closing.sent] == [2]
        assert manager.get_statistics()['messages_skipped'] == 1

    @pytest.mark.asyncio
    async def test_slow_consumer_does_not_block(self):
        """慢速会话不阻塞其他会话，发送未完成时跳过新数据"""
        manager = NetworkManager()
        gate = asyncio.Event()
        fast = _register(manager, 'fast')
        slow = _register(manager, 'slow', gate=gate)

        await manager.broadcast(_update(1))
        await asyncio.sleep(0)
        await manager.broadcast(_update(2))
        await asyncio.sleep(0)

        assert [m['sequence_id'] for m in fast.sent] == [1, 2]
        assert slow.sent == []

        gate.set()
        await manager.drain()
        await manager.broadcast(_update(3))
        await manager.drain()

        # 第2帧被丢弃，不补发
        assert [m['sequence_id'] for m in slow.sent] == [1, 3]

    @pytest.mark.asyncio
    async def test_failed_consumer_dropped(self):
        """发送失败的会话被移除，其他会话不受影响"""
        manager = NetworkManager()
        good = _register(manager, 'good')
        _register(manager, 'bad', fail=True)

        await manager.broadcast(_update(1))
        await manager.drain()

        assert set(manager.sessions) == {'good'}
        assert manager.get_statistics()['send_failures'] == 1

        await manager.broadcast(_update(2))
        await manager.drain()
        assert [m['sequence_id'] for m in good.sent] == [1, 2]

    @pytest.mark.asyncio
    async def test_failed_initial_state_not_registered(self):
        """初始状态发送失败的连接不加入广播集合"""
        manager = NetworkManager()
        manager.set_connect_handler(lambda: _update(0))
        ws = FakeWebSocket(fail=True)

        await manager._handle_websocket(ws)

        assert ws.accepted
        assert manager.sessions == {}
        stats = manager.get_statistics()
        assert stats['failed_handshakes'] == 1
        assert stats['total_connections'] == 1
        assert stats['active_connections'] == 0

        assert await manager.broadcast(_update(1)) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failure", [OSError(98, "address already in use"), SystemExit(1)])
    async def test_start_bind_failure(self, monkeypatch, failure):
        """端口绑定失败转换为NetworkError"""
        import uvicorn

        async def failing_serve(self, sockets=None):
            raise failure

        monkeypatch.setattr(uvicorn.Server, "serve", failing_serve)
        manager = NetworkManager(host="127.0.0.1", port=3000)

        with pytest.raises(NetworkError):
            await manager.start()

    @pytest.mark.asyncio
    async def test_stop_closes_sessions(self):
        manager = NetworkManager()
        ws = _register(manager, 'a')

        await manager.stop()

        assert manager.sessions == {}
        assert ws.client_state == WebSocketState.DISCONNECTED

    @pytest.mark.asyncio
    async def test_core_broadcast_step(self, cone, make_aircraft):
        """驱动推进一个tick并广播给所有会话"""
        world = World(cone, [make_aircraft(aircraft_id="F-16D Instance: 0")])
        manager = NetworkManager()
        core = RadarCore(world, TimeManager(0.01, 1.0), network=manager)
        ws = _register(manager, 'a')

        await core.broadcast_step()
        await manager.drain()

        assert ws.sent[0]['type'] == 'radar_update'
        assert ws.sent[0]['payload']['currentAircrafts'][0]['id'] == "F-16D Instance: 0"


class TestWebSocketEndpoint:
    """WebSocket端点测试"""

    @pytest.fixture
    def client(self, cone, make_aircraft):
        world = World(cone, [make_aircraft(aircraft_id="F-16D Instance: 0")])
        catalog = StaticMetadataCatalog([
            AircraftInfo(image="f16.png", name="F-16D", type="Military", class_name="Plane"),
        ])
        manager = NetworkManager(path="/ws")
        RadarCore(world, TimeManager(0.01, 1.0), network=manager, catalog=catalog)
        return TestClient(manager.get_app())

    def test_initial_state_on_connect(self, client):
        """新连接首先收到探测扇区参数"""
        with client.websocket_connect("/ws") as ws:
            message = ws.receive_json()

        assert message['type'] == 'initial_radar_state'
        assert message['payload'] == {
            'detectionRange': 200.0,
            'sweepWidth': 10.0,
            'maxElevation': 10.0,
        }

    def test_inspect(self, client):
        """查询请求返回机型信息，非法消息不影响连接"""
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_text("not json")
            ws.send_json({"type": "inspect", "aircraftId": "F-16D Instance: 0"})
            reply = ws.receive_json()

        assert reply['type'] == 'aircraft_info'
        assert reply['payload'] == {
            'aircraftId': "F-16D Instance: 0",
            'image': "f16.png",
            'name': "F-16D",
            'type': "Military",
            'class': "Plane",
        }


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
