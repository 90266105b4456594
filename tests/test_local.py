import time

import pytest

from sandboxington.local import LocalHost, LocalServerHost
from sandboxington.packets import ClientPacket, ServerPacket
from sandboxington.queues import MessageQueue
from sandboxington.world import DISTANCE, WorldData


def make_server_host():
    local, remote = MessageQueue(), MessageQueue()
    return LocalServerHost(local, remote), local, remote


def test_server_host_connects_once():
    host, _, _ = make_server_host()
    connects = []
    for _ in range(2):
        host.process(connects.append, lambda peer: None, lambda peer, buf: None)
    assert connects == [0]


def test_server_host_delivers_messages_in_order():
    host, _, remote = make_server_host()
    remote.push(b"ab")
    remote.push(b"cd")
    received = []
    host.process(lambda peer: None, lambda peer: None, lambda peer, buf: received.append((peer, buf.data)))
    assert received == [(0, b"ab"), (0, b"cd")]
    assert remote.empty()


def test_server_host_rejects_other_peers():
    host, _, _ = make_server_host()
    with pytest.raises(ValueError):
        host.send(1, b"x", True)


def test_server_host_send_and_broadcast_reach_client_queue():
    host, local, _ = make_server_host()
    host.send(0, b"x", True)
    host.broadcast(b"y", False)
    assert list(local) == [b"x", b"y"]


def test_close_without_start_queues_exit():
    client = LocalHost()
    client.close()
    assert client.server.commands.pop() == "exit"


def test_start_twice_fails():
    client = LocalHost(seed=0)
    client.start(WorldData())
    try:
        with pytest.raises(RuntimeError):
            client.start(WorldData())
    finally:
        client.close()
    assert client.server.running is False


def test_round_trip_through_local_server():
    client = LocalHost(seed=0)
    client.start(WorldData())
    connected = []
    received = []
    expected_chunks = (2 * DISTANCE) ** 2
    try:
        client.send(bytes([ClientPacket.AUTHENTICATE]), True)
        deadline = time.monotonic() + 20
        while time.monotonic() < deadline:
            client.process(lambda: connected.append(True), lambda: None, lambda buf: received.append(buf.data))
            chunk_count = sum(1 for data in received if data[0] == ServerPacket.CHUNK_DATA)
            if chunk_count >= expected_chunks:
                break
            time.sleep(0.001)
    finally:
        client.close()
    assert connected == [True]
    assert received[0] == b"\x00\x00\x00\x00\x00"
    assert sum(1 for data in received if data[0] == ServerPacket.CHUNK_DATA) == expected_chunks
    assert client.server.running is False