"""The authoritative server-side world."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from sandboxington.bytebuffer import ByteBuffer
from sandboxington.chunk import CHUNK_VOLUME, Chunk, ChunkPos
from sandboxington.host import PlayerHost
from sandboxington.packets import LOGGER, ClientPacket, ServerPacket
from sandboxington.position import WorldPlayer, vec3
from sandboxington.voxel import VoxelRegistry

DISTANCE = 6
"""Half the width, in chunks, of the generated ground."""

GROUND_LEVEL = -2
"""Chunk height of the generated ground."""


@dataclass
class WorldData:
    """Static game data shared by client and server."""

    voxels: VoxelRegistry = field(default_factory=VoxelRegistry)


@dataclass
class WorldState:
    """Players and chunks currently in the world."""

    players: dict[int, WorldPlayer] = field(default_factory=dict)
    chunks: dict[ChunkPos, Chunk] = field(default_factory=dict)


def create_data(voxel_table: Mapping[str, Mapping[str, Any]] | str) -> WorldData:
    """World data from a voxel table, given as a mapping or as TOML text."""
    if isinstance(voxel_table, str):
        voxel_table = tomllib.loads(voxel_table)
    data = WorldData()
    data.voxels.load(voxel_table)
    return data


def _header(packet: ServerPacket, player_id: int) -> ByteBuffer:
    buf = ByteBuffer()
    buf.put_byte(packet)
    buf.put_uint(player_id)
    return buf


class World:
    """Holds world state and answers players' packets."""

    def __init__(self, data: WorldData | None = None, seed: int | None = None) -> None:
        self.data = data
        self.state = WorldState()
        self._rng = np.random.default_rng(seed)

    def init(self) -> None:
        self.generate_default_chunks()

    def update(self, host: PlayerHost) -> None:
        """Advance every player one tick and broadcast the moves."""
        for player_id, player in self.state.players.items():
            if player.position.update():
                buf = _header(ServerPacket.PLAYER_MOVE, player_id)
                player.position.serialize(buf)
                host.broadcast(buf.data, False)

    def connect(self, host: PlayerHost, player_id: int) -> None:
        """Add a player, tell everyone, and send the newcomer the world."""
        LOGGER.debug("Player %d joined", player_id)

        host.send(player_id, _header(ServerPacket.CONFIRM_AUTH, player_id).data, True)
        host.broadcast(_header(ServerPacket.PLAYER_JOIN, player_id).data, False)

        for other_id, other in self.state.players.items():
            host.send(player_id, _header(ServerPacket.PLAYER_JOIN, other_id).data, False)
            buf = _header(ServerPacket.PLAYER_MOVE, other_id)
            other.position.serialize(buf)
            host.send(player_id, buf.data, False)

        self.state.players.setdefault(player_id, WorldPlayer())

        for pos, chunk in self.state.chunks.items():
            buf = ByteBuffer()
            buf.put_byte(ServerPacket.CHUNK_DATA)
            pos.serialize(buf)
            chunk.serialize(buf)
            host.send(player_id, buf.data, False)

    def disconnect(self, host: PlayerHost, player_id: int) -> None:
        """Remove a player and tell everyone."""
        LOGGER.debug("Player %d disconnected", player_id)
        host.broadcast(_header(ServerPacket.PLAYER_LEAVE, player_id).data, True)
        self.state.players.pop(player_id, None)

    def receive(self, host: PlayerHost, player_id: int, packet: ClientPacket, buf: ByteBuffer) -> None:
        """Apply a packet from a player; ``buf`` is positioned after the header."""
        if packet == ClientPacket.CLIENT_MOVE:
            player = self.state.players.get(player_id)
            if player is not None:
                player.position.velocity = vec3(*buf.get_vec3())
                player.position.orientation = vec3(*buf.get_vec3())

    def generate_default_chunks(self) -> None:
        """Fill a flat layer of chunks with randomly scattered voxels."""
        for cz in range(-DISTANCE, DISTANCE):
            for cx in range(-DISTANCE, DISTANCE):
                chunk = self.state.chunks.setdefault(ChunkPos(cx, GROUND_LEVEL, cz), Chunk())
                filled = self._rng.integers(0, 6, CHUNK_VOLUME) == 0
                kinds = self._rng.integers(1, 5, CHUNK_VOLUME)
                chunk.voxels = np.where(filled, kinds, 0).astype(np.uint16)
        LOGGER.debug("generated default chunks")