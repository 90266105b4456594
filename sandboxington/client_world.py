"""The world as a client sees it."""

from __future__ import annotations

from collections.abc import Callable

from sandboxington.bytebuffer import ByteBuffer
from sandboxington.chunk import Chunk, ChunkPos
from sandboxington.client_player import InputWindow, LocalPlayer, RemotePlayer
from sandboxington.host import ServerEndpoint
from sandboxington.packets import LOGGER, ClientPacket, ServerPacket
from sandboxington.position import PlayerPosition
from sandboxington.world import WorldData

ChunkListener = Callable[[ChunkPos, Chunk], None]


class AuthenticationDenied(RuntimeError):
    """The server refused the client."""


class ClientWorld:
    """Players and chunks known to the client, kept in step with server packets."""

    def __init__(self, data: WorldData | None = None, on_chunk: ChunkListener | None = None) -> None:
        self.data = data
        self.local = LocalPlayer()
        self.remotes: dict[int, RemotePlayer] = {}
        self.chunks: dict[ChunkPos, Chunk] = {}
        self.chat: list[tuple[str, str]] = []
        self._on_chunk = on_chunk

    def read(self, header: int, buf: ByteBuffer) -> None:
        """Apply a server packet; ``buf`` is positioned after the header byte."""
        try:
            packet = ServerPacket(header)
        except ValueError:
            LOGGER.debug("Ignoring unknown packet %d", header)
            return

        match packet:
            case ServerPacket.CONFIRM_AUTH:
                self.local.id = buf.get_uint()
            case ServerPacket.PLAYER_JOIN:
                player_id = buf.get_uint()
                if player_id != self.local.id:
                    self.remotes.setdefault(player_id, RemotePlayer())
                    LOGGER.debug("Player %d joined!", player_id)
            case ServerPacket.PLAYER_LEAVE:
                player_id = buf.get_uint()
                if player_id != self.local.id:
                    self.remotes.pop(player_id, None)
                    LOGGER.debug("Player %d left!", player_id)
                else:
                    LOGGER.debug("YOU HAVE LEFT SERVER")
            case ServerPacket.DENY_AUTH:
                raise AuthenticationDenied("Server denied authentication!")
            case ServerPacket.CHAT_MESSAGE:
                player_id = buf.get_uint()
                name = "System" if player_id == 0 else f"Player {player_id}"
                size = buf.get_uint()
                message = buf.get_bytes(size).decode("utf-8", errors="replace")
                LOGGER.debug("%s: %s", name, message)
                self.chat.append((name, message))
            case ServerPacket.PLAYER_MOVE:
                player_id = buf.get_uint()
                position = PlayerPosition.deserialize(buf)
                if player_id == self.local.id:
                    self.local.position.chunk = position.chunk
                    self.local.position.local = position.local
                elif (remote := self.remotes.get(player_id)) is not None:
                    remote.position = position
            case ServerPacket.CHUNK_DATA:
                pos = ChunkPos.deserialize(buf)
                chunk = self.chunks.setdefault(pos, Chunk())
                with chunk.lock:
                    chunk.deserialize(buf)
                if self._on_chunk is not None:
                    self._on_chunk(pos, chunk)
            case _:
                pass

    def input(self, window: InputWindow) -> None:
        self.local.input(window)

    def update(self, host: ServerEndpoint) -> None:
        """Advance every player one tick and send the local movement to the server."""
        self.local.update()
        for remote in self.remotes.values():
            remote.position.update()
        buf = ByteBuffer()
        buf.put_byte(ClientPacket.CLIENT_MOVE)
        buf.put_vec3(self.local.position.velocity)
        buf.put_vec3(self.local.position.orientation)
        host.send(buf.data, False)