"""Turning a chunk's voxels into the triangles of its visible faces."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from sandboxington.chunk import CHUNK_SIZE, CHUNK_VOLUME, Chunk
from sandboxington.voxel import VoxelRegistry, VoxelSide
from sandboxington.voxel_textures import VoxelTextureData

ATLAS_TILES = 16
"""Tiles along each edge of the texture atlas."""

_TILE = 1.0 / ATLAS_TILES
_UINT32 = 0xFFFFFFFF

# Corners of each face as (x, y, z, u, v), two triangles per face.
_FACES: dict[VoxelSide, tuple[tuple[float, float, float, float, float], ...]] = {
    VoxelSide.NEG_Z: (
        (0.0, 0.0, 0.0, 0.0, 0.0),
        (1.0, 0.0, 0.0, 1.0, 0.0),
        (1.0, 1.0, 0.0, 1.0, 1.0),
        (0.0, 0.0, 0.0, 0.0, 0.0),
        (1.0, 1.0, 0.0, 1.0, 1.0),
        (0.0, 1.0, 0.0, 0.0, 1.0),
    ),
    VoxelSide.POS_X: (
        (1.0, 0.0, 0.0, 0.0, 0.0),
        (1.0, 0.0, 1.0, 1.0, 0.0),
        (1.0, 1.0, 1.0, 1.0, 1.0),
        (1.0, 0.0, 0.0, 0.0, 0.0),
        (1.0, 1.0, 1.0, 1.0, 1.0),
        (1.0, 1.0, 0.0, 0.0, 1.0),
    ),
    VoxelSide.POS_Z: (
        (1.0, 0.0, 1.0, 0.0, 0.0),
        (0.0, 0.0, 1.0, 1.0, 0.0),
        (0.0, 1.0, 1.0, 1.0, 1.0),
        (1.0, 0.0, 1.0, 0.0, 0.0),
        (0.0, 1.0, 1.0, 1.0, 1.0),
        (1.0, 1.0, 1.0, 0.0, 1.0),
    ),
    VoxelSide.NEG_X: (
        (0.0, 0.0, 1.0, 0.0, 0.0),
        (0.0, 0.0, 0.0, 1.0, 0.0),
        (0.0, 1.0, 0.0, 1.0, 1.0),
        (0.0, 0.0, 1.0, 0.0, 0.0),
        (0.0, 1.0, 0.0, 1.0, 1.0),
        (0.0, 1.0, 1.0, 0.0, 1.0),
    ),
    VoxelSide.POS_Y: (
        (0.0, 1.0, 0.0, 0.0, 0.0),
        (1.0, 1.0, 0.0, 1.0, 0.0),
        (1.0, 1.0, 1.0, 1.0, 1.0),
        (0.0, 1.0, 0.0, 0.0, 0.0),
        (1.0, 1.0, 1.0, 1.0, 1.0),
        (0.0, 1.0, 1.0, 0.0, 1.0),
    ),
    VoxelSide.NEG_Y: (
        (0.0, 0.0, 0.0, 0.0, 0.0),
        (1.0, 0.0, 0.0, 1.0, 0.0),
        (1.0, 0.0, 1.0, 1.0, 1.0),
        (0.0, 0.0, 0.0, 0.0, 0.0),
        (1.0, 0.0, 1.0, 1.0, 1.0),
        (0.0, 0.0, 1.0, 0.0, 1.0),
    ),
}

# Normal code of each face, stored above the colour bits.
_NORMAL_BITS: dict[VoxelSide, int] = {
    VoxelSide.POS_X: 0x0000,
    VoxelSide.NEG_X: 0x1000,
    VoxelSide.POS_Y: 0x2000,
    VoxelSide.NEG_Y: 0x3000,
    VoxelSide.POS_Z: 0x4000,
    VoxelSide.NEG_Z: 0x5000,
}

_NEIGHBOURS: tuple[tuple[VoxelSide, int, int], ...] = (
    (VoxelSide.POS_X, 0, 1),
    (VoxelSide.NEG_X, 0, -1),
    (VoxelSide.POS_Y, 1, 1),
    (VoxelSide.NEG_Y, 1, -1),
    (VoxelSide.POS_Z, 2, 1),
    (VoxelSide.NEG_Z, 2, -1),
)


@dataclass(frozen=True, slots=True)
class VoxelVertex:
    """One vertex of a chunk mesh.

    ``bit_params`` packs red, blue and green (4 bits each), then the face normal.
    """

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    uv: tuple[float, float] = (0.0, 0.0)
    bit_params: int = 0


def face_vertices(side: VoxelSide, params: int) -> list[VoxelVertex]:
    """The six vertices of a unit cube's ``side``, with the face's normal added to ``params``."""
    bits = (params + _NORMAL_BITS[side]) & _UINT32
    return [VoxelVertex((x, y, z), (u, v), bits) for x, y, z, u, v in _FACES[side]]


def _flat_voxels(voxels: Chunk | Sequence[int] | np.ndarray) -> np.ndarray:
    if isinstance(voxels, Chunk):
        voxels = voxels.voxels
    array = np.asarray(voxels).reshape(-1)
    if array.size != CHUNK_VOLUME:
        raise ValueError(f"a chunk holds {CHUNK_VOLUME} voxels, got {array.size}")
    return array


def _index(x: int, y: int, z: int) -> int:
    return x + y * CHUNK_SIZE + z * CHUNK_SIZE * CHUNK_SIZE


def _visible_sides(registry: VoxelRegistry, voxels: np.ndarray, pos: Sequence[int]) -> list[VoxelSide]:
    x, y, z = (int(c) for c in pos)
    if not voxels[_index(x, y, z)]:
        return []
    sides = []
    for side, axis, step in _NEIGHBOURS:
        neighbour = [x, y, z]
        neighbour[axis] += step
        if not 0 <= neighbour[axis] < CHUNK_SIZE:
            # Faces on the chunk border are always drawn.
            sides.append(side)
            continue
        other = int(voxels[_index(*neighbour)])
        if other == 0 or registry.get(other).transparent:
            sides.append(side)
    return sides


def visible_sides(
    registry: VoxelRegistry, voxels: Chunk | Sequence[int] | np.ndarray, pos: Sequence[int]
) -> list[VoxelSide]:
    """Sides of the voxel at ``pos`` that face air, a transparent voxel or the chunk border."""
    x, y, z = pos
    if not all(0 <= c < CHUNK_SIZE for c in (x, y, z)):
        raise IndexError(f"voxel position {tuple(pos)} lies outside the chunk")
    return _visible_sides(registry, _flat_voxels(voxels), pos)


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // b
    return q if a >= 0 else -q


def mesh(
    registry: VoxelRegistry,
    texture_data: VoxelTextureData,
    voxels: Chunk | Sequence[int] | np.ndarray,
) -> list[VoxelVertex]:
    """Triangles for every visible face in a chunk, in chunk-local coordinates."""
    flat = _flat_voxels(voxels)
    data: list[VoxelVertex] = []
    for x in range(CHUNK_SIZE):
        shade = CHUNK_SIZE - x
        color = shade + (shade << 4) + (shade << 8)
        for y in range(CHUNK_SIZE):
            for z in range(CHUNK_SIZE):
                vid = int(flat[_index(x, y, z)])
                for side in _visible_sides(registry, flat, (x, y, z)):
                    voxel = registry.get(vid)
                    index = texture_data.texture_index(voxel.name, side)
                    u0 = _TILE * float(index % ATLAS_TILES)
                    v0 = _TILE * float(_trunc_div(255 - index, ATLAS_TILES))
                    for vertex in face_vertices(side, color):
                        px, py, pz = vertex.position
                        u, v = vertex.uv
                        data.append(
                            VoxelVertex(
                                (px + x, py + y, pz + z),
                                (u / ATLAS_TILES + u0, v / ATLAS_TILES + v0),
                                vertex.bit_params,
                            )
                        )
    return data