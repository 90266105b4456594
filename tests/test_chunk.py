import numpy as np
import pytest

from sandboxington.bytebuffer import ByteBuffer
from sandboxington.chunk import CHUNK_SIZE, CHUNK_VOLUME, Chunk, ChunkPos


def test_chunk_pos_wire_format():
    buf = ByteBuffer()
    ChunkPos(1, -2, 3).serialize(buf)
    assert buf.data == (
        (1).to_bytes(4, "little", signed=True)
        + (-2).to_bytes(4, "little", signed=True)
        + (3).to_bytes(4, "little", signed=True)
    )


def test_chunk_pos_round_trip():
    buf = ByteBuffer()
    pos = ChunkPos(-6, -2, 5)
    pos.serialize(buf)
    assert ChunkPos.deserialize(buf) == pos


def test_chunk_pos_hash_and_arithmetic():
    a = ChunkPos(1, 2, 3)
    b = ChunkPos(4, 5, 6)
    assert {a: "x"}[ChunkPos(1, 2, 3)] == "x"
    assert (b - a) + a == b
    assert -a + a == ChunkPos()
    assert tuple(a * 2) == (a.x * 2, a.y * 2, a.z * 2)


def test_new_chunk_is_empty():
    chunk = Chunk()
    assert chunk.voxels.size == CHUNK_VOLUME
    assert not chunk.voxels.any()


def test_set_and_get_voxel():
    chunk = Chunk()
    chunk.set_voxel((1, 2, 3), 7)
    assert chunk.voxel_at((1, 2, 3)) == 7
    assert chunk.voxels[1 + 2 * CHUNK_SIZE + 3 * CHUNK_SIZE * CHUNK_SIZE] == 7
    assert chunk.voxel_at((3, 2, 1)) == 0


def test_voxel_outside_chunk_raises():
    with pytest.raises(IndexError):
        Chunk().voxel_at((CHUNK_SIZE, 0, 0))


def test_wrong_voxel_count_raises():
    with pytest.raises(ValueError):
        Chunk([1, 2, 3])


def test_chunk_round_trip():
    chunk = Chunk(np.arange(CHUNK_VOLUME) % 5)
    buf = ByteBuffer()
    chunk.serialize(buf)
    assert len(buf) == CHUNK_VOLUME * 2
    copy = Chunk()
    copy.deserialize(buf)
    assert np.array_equal(copy.voxels, chunk.voxels)
    assert buf.bytes_remaining() == 0


def test_chunk_serialize_is_little_endian():
    chunk = Chunk()
    chunk.set_voxel((0, 0, 0), 0x0102)
    buf = ByteBuffer()
    chunk.serialize(buf)
    assert buf.data[:2] == bytes([0x02, 0x01])


def test_deserialize_short_buffer_reads_zeros():
    chunk = Chunk(np.ones(CHUNK_VOLUME))
    chunk.deserialize(ByteBuffer())
    assert not chunk.voxels.any()