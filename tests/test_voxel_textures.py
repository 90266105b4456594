import pytest

from sandboxington.voxel import VoxelSide
from sandboxington.voxel_textures import VoxelSideTexture, VoxelTextureData


def test_side_texture_prefers_top_and_bottom():
    texture = VoxelSideTexture(top=3, bottom=5, other=9)
    assert texture.get(VoxelSide.POS_Y) == 3
    assert texture.get(VoxelSide.NEG_Y) == 5
    assert texture.get(VoxelSide.POS_X) == 9


def test_side_texture_falls_back_to_other():
    texture = VoxelSideTexture(top=3, other=9)
    assert texture.get(VoxelSide.NEG_Y) == 9
    assert texture.get(VoxelSide.NEG_Z) == 9


def test_zero_top_counts_as_set():
    texture = VoxelSideTexture(top=0, other=9)
    assert texture.get(VoxelSide.POS_Y) == 0


def test_missing_default_raises():
    with pytest.raises(ValueError):
        VoxelSideTexture(top=1).get(VoxelSide.POS_X)


def test_load_integer_and_table_sides():
    data = VoxelTextureData()
    data.load({"voxels": {"stone": {"sides": 2}, "grass": {"sides": {"top": 0, "bottom": 2, "default": 3}}}})
    assert data.texture_index("stone", VoxelSide.POS_Y) == 2
    assert data.texture_index("grass", VoxelSide.POS_Y) == 0
    assert data.texture_index("grass", VoxelSide.NEG_Y) == 2
    assert data.texture_index("grass", VoxelSide.POS_X) == 3
    assert "grass" in data


def test_load_toml_text_with_paths():
    data = VoxelTextureData()
    data.load(
        """
[shaders.chunk]
vert = "chunk.vert"
frag = "chunk.frag"

[textures.atlas]
path = "atlas.png"

[voxels.dirt]
sides = 4
"""
    )
    assert data.shaders["chunk"] == ("shaders/chunk.vert", "shaders/chunk.frag")
    assert data.textures["atlas"] == "textures/atlas.png"
    assert data.texture_index("dirt", VoxelSide.NEG_X) == 4


def test_unknown_side_name_raises():
    with pytest.raises(ValueError, match="voxel side for stone"):
        VoxelTextureData().load({"voxels": {"stone": {"sides": {"left": 1}}}})


def test_non_integer_sides_raise():
    with pytest.raises(ValueError, match="voxel table for stone"):
        VoxelTextureData().load({"voxels": {"stone": {"sides": "grey"}}})


def test_unknown_voxel_raises_key_error():
    data = VoxelTextureData()
    data.load({"voxels": {"stone": {"sides": 1}}})
    with pytest.raises(KeyError):
        data.texture_index("lava", VoxelSide.POS_X)