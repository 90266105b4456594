"""Voxel sandbox game core: packet encoding, world simulation, in-process hosts and chunk meshing."""

__version__ = "0.1.0"