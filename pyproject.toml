[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voxelworld"
version = "0.1.0"
description = "A small 2D voxel sandbox: mine blocks, craft pickaxes and watch animals roam a generated world."
requires-python = ">=3.10"
keywords = ["game", "sandbox", "voxel", "pygame", "crafting", "procedural-generation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
voxelworld = "voxelworld.app:main"

[tool.hatch.build.targets.wheel]
packages = ["voxelworld"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
