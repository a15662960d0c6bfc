"""A 2D voxel sandbox with terrain generation, mining, crafting and animals."""

__version__ = "0.1.0"