"""Which atlas texture each side of each voxel kind shows."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sandboxington.packets import LOGGER
from sandboxington.voxel import VoxelSide

SHADER_DIRECTORY = "shaders/"
TEXTURE_DIRECTORY = "textures/"


def _texture_index(value: Any, name: str, message: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{message} for {name}")
    return value & 0xFFFF


@dataclass
class VoxelSideTexture:
    """Atlas indices for the top, the bottom and the other sides of a voxel."""

    top: int | None = None
    bottom: int | None = None
    other: int | None = None

    def get(self, side: VoxelSide) -> int:
        """The atlas index shown on ``side``."""
        if side is VoxelSide.POS_Y and self.top is not None:
            return self.top
        if side is VoxelSide.NEG_Y and self.bottom is not None:
            return self.bottom
        if self.other is None:
            raise ValueError(f"no texture for side {side.name}")
        return self.other


class VoxelTextureData:
    """Shader and texture paths, and the side textures of every voxel kind."""

    def __init__(self) -> None:
        self.shaders: dict[str, tuple[str, str]] = {}
        self.textures: dict[str, str] = {}
        self._voxels: dict[str, VoxelSideTexture] = {}

    def load(self, table: Mapping[str, Any] | str) -> None:
        """Read a texture table, given as a mapping or as TOML text."""
        if isinstance(table, str):
            table = tomllib.loads(table)

        for name, entry in table.get("shaders", {}).items():
            self.shaders[name] = (SHADER_DIRECTORY + entry["vert"], SHADER_DIRECTORY + entry["frag"])
            LOGGER.debug("Added shader %s", name)

        for name, entry in table.get("textures", {}).items():
            self.textures[name] = TEXTURE_DIRECTORY + entry["path"]

        for name, entry in table["voxels"].items():
            sides = entry["sides"]
            texture = self._voxels.setdefault(name, VoxelSideTexture())
            if isinstance(sides, Mapping):
                for side, value in sides.items():
                    index = _texture_index(value, name, "Could not decode voxel side")
                    if side == "bottom":
                        texture.bottom = index
                    elif side == "top":
                        texture.top = index
                    elif side == "default":
                        texture.other = index
                    else:
                        raise ValueError(f"Could not decode voxel side for {name}")
            elif isinstance(sides, int) and not isinstance(sides, bool):
                texture.other = sides & 0xFFFF
            else:
                raise ValueError(f"Could not decode voxel table for {name}")

    def texture_index(self, voxel: str, side: VoxelSide) -> int:
        """The atlas index of ``side`` of the voxel kind named ``voxel``."""
        return self._voxels[voxel].get(side)

    def __contains__(self, voxel: object) -> bool:
        return voxel in self._voxels