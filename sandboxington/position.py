"""Player positions and their wire format."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from sandboxington.bytebuffer import ByteBuffer
from sandboxington.chunk import ChunkPos
from sandboxington.packets import UPS

UP = np.array([0.0, 1.0, 0.0], dtype=np.float32)


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    """A single-precision 3-vector."""
    return np.array([x, y, z], dtype=np.float32)


def look_at(eye: np.ndarray, center: np.ndarray, up: np.ndarray) -> np.ndarray:
    """Right-handed view matrix, row-major, to be applied as ``M @ [x, y, z, 1]``."""
    eye = np.asarray(eye, dtype=np.float64)
    f = np.asarray(center, dtype=np.float64) - eye
    f /= np.linalg.norm(f)
    s = np.cross(f, np.asarray(up, dtype=np.float64))
    s /= np.linalg.norm(s)
    u = np.cross(s, f)
    matrix = np.identity(4)
    matrix[0, :3] = s
    matrix[1, :3] = u
    matrix[2, :3] = -f
    matrix[0, 3] = -np.dot(s, eye)
    matrix[1, 3] = -np.dot(u, eye)
    matrix[2, 3] = np.dot(f, eye)
    return matrix.astype(np.float32)


@dataclass(eq=False)
class PlayerPosition:
    """Where a player is, where it looks, and how fast it moves (voxels per second)."""

    chunk: ChunkPos = field(default_factory=ChunkPos)
    local: np.ndarray = field(default_factory=vec3)
    orientation: np.ndarray = field(default_factory=lambda: vec3(0.0, 0.0, -1.0))
    velocity: np.ndarray = field(default_factory=vec3)

    def __post_init__(self) -> None:
        self.local = np.asarray(self.local, dtype=np.float32)
        self.orientation = np.asarray(self.orientation, dtype=np.float32)
        self.velocity = np.asarray(self.velocity, dtype=np.float32)

    def update(self) -> bool:
        """Advance one tick; returns whether the position changed hands a move."""
        self.local = self.velocity * np.float32(1.0 / UPS) + self.local
        return True

    def view(self) -> np.ndarray:
        """The view matrix looking along the orientation from the local position."""
        return look_at(self.local, self.local + self.orientation, UP)

    def serialize(self, buf: ByteBuffer) -> None:
        """Append chunk, local position, orientation and velocity."""
        self.chunk.serialize(buf)
        buf.put_vec3(self.local)
        buf.put_vec3(self.orientation)
        buf.put_vec3(self.velocity)

    @classmethod
    def deserialize(cls, buf: ByteBuffer) -> PlayerPosition:
        """Read a position written by ``serialize``."""
        chunk = ChunkPos.deserialize(buf)
        local = vec3(*buf.get_vec3())
        orientation = vec3(*buf.get_vec3())
        velocity = vec3(*buf.get_vec3())
        return cls(chunk, local, orientation, velocity)


@dataclass(eq=False)
class WorldPlayer:
    """A player as the server world knows it."""

    position: PlayerPosition = field(default_factory=PlayerPosition)