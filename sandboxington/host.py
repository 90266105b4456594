"""Interfaces through which the world talks to its peers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from sandboxington.bytebuffer import ByteBuffer

PeerId = int


class PlayerHost(ABC):
    """Sends data to players."""

    @abstractmethod
    def send(self, peer: PeerId, data: bytes, reliable: bool) -> None:
        """Send ``data`` to one peer."""

    @abstractmethod
    def broadcast(self, data: bytes, reliable: bool) -> None:
        """Send ``data`` to every peer."""


class ServerHost(PlayerHost):
    """The server side of a connection."""

    @abstractmethod
    def process(
        self,
        connect: Callable[[PeerId], None],
        disconnect: Callable[[PeerId], None],
        receive: Callable[[PeerId, ByteBuffer], None],
    ) -> None:
        """Handle every pending event through the given callbacks."""

    @abstractmethod
    def close(self) -> None:
        """Drop all peers and release the host."""


class ServerEndpoint(ABC):
    """Sends data to the server."""

    @abstractmethod
    def send(self, data: bytes, reliable: bool) -> None:
        """Send ``data`` to the server."""


class ClientHost(ServerEndpoint):
    """The client side of a connection."""

    @abstractmethod
    def process(
        self,
        connect: Callable[[], None],
        disconnect: Callable[[], None],
        receive: Callable[[ByteBuffer], None],
    ) -> None:
        """Handle every pending event through the given callbacks."""

    @abstractmethod
    def close(self) -> None:
        """Disconnect from the server."""