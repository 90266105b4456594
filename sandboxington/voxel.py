"""Voxel kinds and the registry that maps voxel ids to them."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sandboxington.packets import LOGGER

VoxelID = int


class Transparency(Enum):
    OPAQUE = 0
    TRANSPARENT = 1


class VoxelSide(Enum):
    """The six faces of a voxel."""

    POS_X = 0
    NEG_X = 1
    POS_Y = 2
    NEG_Y = 3
    POS_Z = 4
    NEG_Z = 5


def _bool_or(table: Mapping[str, Any], key: str, default: bool) -> bool:
    value = table.get(key, default)
    return value if isinstance(value, bool) else default


@dataclass(frozen=True)
class Voxel:
    """A kind of voxel."""

    name: str
    transparent: bool = False
    solid: bool = True

    @classmethod
    def from_entry(cls, name: str, table: Mapping[str, Any]) -> Voxel:
        """Build a voxel from its name and its table of settings."""
        return cls(
            name=name,
            transparent=_bool_or(table, "transparent", False),
            solid=_bool_or(table, "solid", True),
        )


class VoxelRegistry:
    """Voxel kinds by id."""

    def __init__(self) -> None:
        self._voxels: dict[VoxelID, Voxel] = {}

    def load(self, table: Mapping[str, Mapping[str, Any]]) -> None:
        """Add every voxel of a name-to-settings table; each entry needs an ``id``."""
        for name, entry in table.items():
            LOGGER.debug("Adding %s", name)
            voxel_id = entry["id"]
            if isinstance(voxel_id, bool) or not isinstance(voxel_id, int):
                raise ValueError(f"voxel {name!r} has a non-integer id")
            if not 0 <= voxel_id <= 0xFFFF:
                raise ValueError(f"voxel {name!r} has an id out of range")
            self._voxels.setdefault(voxel_id, Voxel.from_entry(name, entry))
        if not self._voxels:
            raise ValueError("no voxels defined")

    def get(self, voxel_id: VoxelID) -> Voxel:
        """The voxel with ``voxel_id``; raises KeyError if unknown."""
        return self._voxels[voxel_id]

    def __len__(self) -> int:
        return len(self._voxels)

    def __contains__(self, voxel_id: object) -> bool:
        return voxel_id in self._voxels