"""Chunks of voxels and their positions in the world."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from sandboxington.bytebuffer import ByteBuffer

CHUNK_SIZE = 16
CHUNK_VOLUME = CHUNK_SIZE * CHUNK_SIZE * CHUNK_SIZE

_WIRE_DTYPE = np.dtype("<u2")


@dataclass(frozen=True, slots=True)
class ChunkPos:
    """Location of a chunk in the world, in chunk units."""

    x: int = 0
    y: int = 0
    z: int = 0

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Iterable[int]) -> ChunkPos:
        ox, oy, oz = other
        return ChunkPos(self.x + ox, self.y + oy, self.z + oz)

    def __sub__(self, other: Iterable[int]) -> ChunkPos:
        ox, oy, oz = other
        return ChunkPos(self.x - ox, self.y - oy, self.z - oz)

    def __neg__(self) -> ChunkPos:
        return ChunkPos(-self.x, -self.y, -self.z)

    def __mul__(self, factor: int) -> ChunkPos:
        return ChunkPos(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def serialize(self, buf: ByteBuffer) -> None:
        """Append the position as three signed 32-bit integers."""
        buf.put_ivec3(self)

    @classmethod
    def deserialize(cls, buf: ByteBuffer) -> ChunkPos:
        """Read a position written by ``serialize``."""
        return cls(*buf.get_ivec3())


class Chunk:
    """A cube of ``CHUNK_SIZE``³ voxel ids, indexed x-fastest then y then z."""

    def __init__(self, voxels: Iterable[int] | np.ndarray | None = None) -> None:
        if voxels is None:
            self.voxels = np.zeros(CHUNK_VOLUME, dtype=np.uint16)
        else:
            array = np.asarray(voxels, dtype=np.uint16).reshape(-1)
            if array.size != CHUNK_VOLUME:
                raise ValueError(f"a chunk holds {CHUNK_VOLUME} voxels, got {array.size}")
            self.voxels = array.copy()
        self.lock = threading.Lock()

    @staticmethod
    def index(pos: Sequence[int]) -> int:
        """Flat index of a voxel position inside the chunk."""
        x, y, z = pos
        if not all(0 <= c < CHUNK_SIZE for c in (x, y, z)):
            raise IndexError(f"voxel position {tuple(pos)} lies outside the chunk")
        return x + y * CHUNK_SIZE + z * CHUNK_SIZE * CHUNK_SIZE

    def voxel_at(self, pos: Sequence[int]) -> int:
        """The voxel id at ``pos``."""
        return int(self.voxels[self.index(pos)])

    def set_voxel(self, pos: Sequence[int], voxel_id: int) -> None:
        """Store ``voxel_id`` at ``pos``."""
        self.voxels[self.index(pos)] = voxel_id

    def serialize(self, buf: ByteBuffer) -> None:
        """Append every voxel id as a little-endian 16-bit integer."""
        buf.put_bytes(self.voxels.astype(_WIRE_DTYPE).tobytes())

    def deserialize(self, buf: ByteBuffer) -> None:
        """Replace the voxels with those read from ``buf``."""
        raw = buf.get_bytes(CHUNK_VOLUME * _WIRE_DTYPE.itemsize)
        self.voxels = np.frombuffer(raw, dtype=_WIRE_DTYPE).astype(np.uint16)