"""A client host that runs its own server in a background thread."""

from __future__ import annotations

import threading
from collections.abc import Callable

from sandboxington.bytebuffer import ByteBuffer
from sandboxington.host import ClientHost, PeerId, ServerHost
from sandboxington.queues import MessageQueue
from sandboxington.server import Server
from sandboxington.world import WorldData

LOCAL_PEER: PeerId = 0
"""The only peer a local server knows."""


class LocalServerHost(ServerHost):
    """The server end of an in-process connection.

    Messages for the client go to ``local``; messages from it are read from ``remote``.
    """

    def __init__(self, local: MessageQueue[bytes], remote: MessageQueue[bytes]) -> None:
        self._local = local
        self._remote = remote
        self._should_connect = True

    def process(
        self,
        connect: Callable[[PeerId], None],
        disconnect: Callable[[PeerId], None],
        receive: Callable[[PeerId, ByteBuffer], None],
    ) -> None:
        if self._should_connect:
            self._should_connect = False
            connect(LOCAL_PEER)
        for message in self._remote:
            receive(LOCAL_PEER, ByteBuffer(message))

    def send(self, peer: PeerId, data: bytes, reliable: bool = True) -> None:
        if peer != LOCAL_PEER:
            raise ValueError("Incorrect ID")
        self._local.push(bytes(data))

    def broadcast(self, data: bytes, reliable: bool = True) -> None:
        self._local.push(bytes(data))

    def close(self) -> None:
        """Nothing to release for an in-process connection."""


class LocalHost(ClientHost):
    """The client end of an in-process connection to a private server."""

    def __init__(self, seed: int | None = None) -> None:
        self._local: MessageQueue[bytes] = MessageQueue()
        self._remote: MessageQueue[bytes] = MessageQueue()
        self.server = Server(LocalServerHost(self._remote, self._local), seed=seed)
        self._thread: threading.Thread | None = None
        self._should_connect = True

    def start(self, data: WorldData) -> None:
        """Set up the server's world and run the server in a background thread."""
        if self._thread is not None:
            raise RuntimeError("local server already started")
        self.server.init_world(data)
        self._thread = threading.Thread(target=self.server.run, name="local-server", daemon=True)
        self._thread.start()

    def process(
        self,
        connect: Callable[[], None],
        disconnect: Callable[[], None],
        receive: Callable[[ByteBuffer], None],
    ) -> None:
        if self._should_connect:
            self._should_connect = False
            connect()
        for message in self._remote:
            receive(ByteBuffer(message))

    def send(self, data: bytes, reliable: bool = True) -> None:
        self._local.push(bytes(data))

    def close(self) -> None:
        """Ask the server to exit and wait for its thread."""
        self.server.commands.push("exit")
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def __enter__(self) -> LocalHost:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()