"""Procedural terrain: height noise, caves, water, trees, grass and ores."""

from __future__ import annotations

import math
import random

from .model import WORLD_HEIGHT, WORLD_WIDTH, BlockType, World

_MASK32 = 0xFFFFFFFF

CAVE_COUNT = 30
LAKE_COUNT = 4
RIVER_COUNT = 1
TREE_ATTEMPTS = 40
ORE_START_Y = 50


def simple_noise(x: int, y: int) -> float:
    """Deterministic lattice noise in the range (-1, 1], using 32-bit wrapping."""
    n = (x + y * 57) & _MASK32
    n = ((n << 13) & _MASK32) ^ n
    value = (n * (n * n * 15731 + 789221) + 1376312589) & 0x7FFFFFFF
    return 1.0 - value / 1073741824.0


def perlin_noise(x: float, y: float) -> float:
    """Bilinearly interpolated lattice noise."""
    xi = int(x)
    yi = int(y)
    xf = x - xi
    yf = y - yi

    a = simple_noise(xi, yi)
    b = simple_noise(xi + 1, yi)
    c = simple_noise(xi, yi + 1)
    d = simple_noise(xi + 1, yi + 1)

    top = a * (1 - xf) + b * xf
    bottom = c * (1 - xf) + d * xf
    return top * (1 - yf) + bottom * yf


def find_surface_height(world: World, x: int) -> int:
    """The row just above the first non-air block of a column."""
    for y, row in enumerate(world.blocks):
        if row[x] != BlockType.AIR:
            return y - 1
    return WORLD_HEIGHT - 1


def generate_tree(world: World, x: int, base_y: int, rng: random.Random) -> None:
    """Grow a trunk upward from base_y and crown it with leaves."""
    tree_height = rng.randint(5, 12)
    for h in range(tree_height):
        y = base_y - h
        if 0 <= y < WORLD_HEIGHT:
            world.blocks[y][x] = BlockType.WOOD

    leaf_center_y = base_y - tree_height + 2
    for dy in range(-3, 2):
        for dx in range(-3, 4):
            leaf_x = x + dx
            leaf_y = leaf_center_y + dy
            if not world.in_bounds(leaf_x, leaf_y):
                continue
            if math.hypot(dx, dy) <= 3.0 and world.blocks[leaf_y][leaf_x] == BlockType.AIR:
                if rng.randint(0, 100) < 80:
                    world.blocks[leaf_y][leaf_x] = BlockType.LEAVES


def generate_small_lake(world: World, center_x: int, center_y: int, radius: int) -> None:
    """Flood a disc with water, leaving stone in place."""
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            x = center_x + dx
            y = center_y + dy
            if world.in_bounds(x, y) and math.hypot(dx, dy) <= radius:
                if world.blocks[y][x] != BlockType.STONE:
                    world.blocks[y][x] = BlockType.WATER


def generate_small_river(
    world: World,
    start_x: int,
    end_x: int,
    surface_heights: list[int],
    rng: random.Random,
) -> None:
    """Cut a shallow channel of water along the surface between two columns."""
    if start_x > end_x:
        start_x, end_x = end_x, start_x

    river_width = 1
    river_depth = rng.randint(2, 3)

    for x in range(start_x, end_x + 1, 2):
        center_y = surface_heights[x]
        for dy in range(river_depth):
            for dx in range(-river_width, river_width + 1):
                river_x = x + dx
                river_y = center_y + dy
                if world.in_bounds(river_x, river_y):
                    if world.blocks[river_y][river_x] != BlockType.STONE:
                        world.blocks[river_y][river_x] = BlockType.WATER


def _fill_terrain(world: World) -> list[int]:
    surface_heights = []
    for x in range(WORLD_WIDTH):
        height_noise = perlin_noise(x * 0.1, 0) * 0.5 + 0.5
        surface = int(height_noise * 30) + 40
        surface_heights.append(surface)
        for y, row in enumerate(world.blocks):
            if y > surface + 15:
                row[x] = BlockType.STONE
            elif y > surface:
                row[x] = BlockType.DIRT
            elif y == surface:
                row[x] = BlockType.GRASS
            else:
                row[x] = BlockType.AIR
    return surface_heights


def _carve_caves(world: World, rng: random.Random) -> None:
    for _ in range(CAVE_COUNT):
        x = rng.randint(5, WORLD_WIDTH - 5)
        y = rng.randint(60, WORLD_HEIGHT - 5)
        size = rng.randint(2, 4)
        for dx in range(-size, size + 1):
            for dy in range(-size, size + 1):
                if world.in_bounds(x + dx, y + dy) and dx * dx + dy * dy <= size * size:
                    world.blocks[y + dy][x + dx] = BlockType.AIR


def _has_tree_space(world: World, x: int, surface_y: int) -> bool:
    return not any(
        world.in_bounds(check_x, check_y) and world.blocks[check_y][check_x] != BlockType.AIR
        for check_x in range(x - 1, x + 2)
        for check_y in range(surface_y - 12, surface_y)
    )


def _plant_trees(world: World, rng: random.Random) -> None:
    for _ in range(TREE_ATTEMPTS):
        x = rng.randint(10, WORLD_WIDTH - 10)
        surface_y = find_surface_height(world, x)
        if not 0 < surface_y < 60:
            continue
        if (
            world.blocks[surface_y][x] == BlockType.AIR
            and world.blocks[surface_y + 1][x] == BlockType.GRASS
            and _has_tree_space(world, x, surface_y)
        ):
            generate_tree(world, x, surface_y, rng)


def _grow_grass(world: World, surface_heights: list[int], rng: random.Random) -> None:
    for x, surface_y in enumerate(surface_heights):
        if rng.randint(0, 100) >= 15:
            continue
        if surface_y > 0 and world.blocks[surface_y - 1][x] == BlockType.AIR:
            grass_height = rng.randint(1, 3)
            for h in range(grass_height):
                y = surface_y - 1 - h
                if y >= 0 and world.blocks[y][x] == BlockType.AIR:
                    world.blocks[y][x] = BlockType.LEAVES


def _ore_for(y: int, chance: int) -> BlockType | None:
    if y > 85 and chance < 8:
        return BlockType.COAL_ORE
    if y > 80 and chance < 4:
        return BlockType.IRON_ORE
    if y > 85 and chance < 2:
        return BlockType.GOLD_ORE
    if y > 90 and chance < 1:
        return BlockType.DIAMOND_ORE
    if 75 < y < 85 and chance < 1:
        return BlockType.EMERALD_ORE
    return None


def _scatter_ores(world: World, rng: random.Random) -> None:
    for x in range(WORLD_WIDTH):
        for y in range(ORE_START_Y, WORLD_HEIGHT):
            if world.blocks[y][x] != BlockType.STONE:
                continue
            ore = _ore_for(y, rng.randint(0, 100))
            if ore is not None:
                world.blocks[y][x] = ore


def generate_world(world: World, rng: random.Random) -> list[int]:
    """Fill the world's block grid with fresh terrain; return the surface heights."""
    surface_heights = _fill_terrain(world)
    _carve_caves(world, rng)

    for _ in range(LAKE_COUNT):
        x = rng.randint(40, WORLD_WIDTH - 40)
        surface_y = surface_heights[x]
        radius = rng.randint(3, 6)
        generate_small_lake(world, x, surface_y, radius)

    for _ in range(RIVER_COUNT):
        start_x = rng.randint(20, WORLD_WIDTH // 2 - 20)
        end_x = rng.randint(WORLD_WIDTH // 2 + 20, WORLD_WIDTH - 20)
        generate_small_river(world, start_x, end_x, surface_heights, rng)

    _plant_trees(world, rng)
    _grow_grass(world, surface_heights, rng)
    _scatter_ores(world, rng)
    return surface_heights