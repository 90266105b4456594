import pytest

from sandboxington.voxel import Voxel, VoxelRegistry


def test_from_entry_defaults():
    voxel = Voxel.from_entry("stone", {"id": 1})
    assert voxel == Voxel("stone", transparent=False, solid=True)


def test_from_entry_reads_flags():
    voxel = Voxel.from_entry("water", {"id": 3, "transparent": True, "solid": False})
    assert voxel.transparent is True
    assert voxel.solid is False


def test_from_entry_ignores_wrongly_typed_flags():
    voxel = Voxel.from_entry("odd", {"transparent": "yes", "solid": 0})
    assert voxel.transparent is False
    assert voxel.solid is True


def test_registry_load_and_get():
    registry = VoxelRegistry()
    registry.load({"stone": {"id": 1}, "glass": {"id": 2, "transparent": True}})
    assert len(registry) == 2
    assert registry.get(1).name == "stone"
    assert registry.get(2).transparent is True
    assert 2 in registry


def test_registry_keeps_first_of_duplicate_ids():
    registry = VoxelRegistry()
    registry.load({"stone": {"id": 1}, "rock": {"id": 1}})
    assert registry.get(1).name == "stone"


def test_registry_unknown_id_raises():
    registry = VoxelRegistry()
    registry.load({"stone": {"id": 1}})
    with pytest.raises(KeyError):
        registry.get(9)


def test_registry_empty_table_raises():
    with pytest.raises(ValueError):
        VoxelRegistry().load({})


def test_registry_missing_id_raises():
    with pytest.raises(KeyError):
        VoxelRegistry().load({"stone": {"solid": True}})


def test_registry_bad_id_raises():
    with pytest.raises(ValueError):
        VoxelRegistry().load({"stone": {"id": "one"}})