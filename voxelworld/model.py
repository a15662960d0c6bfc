"""Core data types, world constants and block properties."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import NamedTuple

WORLD_WIDTH = 200
WORLD_HEIGHT = 100
BLOCK_SIZE = 32
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 800
INVENTORY_SIZE = 9
EXTENDED_INVENTORY_SIZE = 27
MAX_REACH_DISTANCE = 100.0
MAX_ANIMALS = 20
MAX_STACK = 64


class BlockType(IntEnum):
    AIR = 0
    DIRT = 1
    STONE = 2
    GRASS = 3
    WATER = 4
    SAND = 5
    WOOD = 6
    LEAVES = 7
    COAL_ORE = 8
    IRON_ORE = 9
    GOLD_ORE = 10
    DIAMOND_ORE = 11
    EMERALD_ORE = 12


class ToolType(IntEnum):
    NONE = 0
    WOODEN_PICKAXE = 1
    STONE_PICKAXE = 2
    IRON_PICKAXE = 3
    GOLD_PICKAXE = 4
    DIAMOND_PICKAXE = 5


class AnimalType(IntEnum):
    RABBIT = 0
    BIRD = 1
    FISH = 2
    PIG = 3
    CHICKEN = 4


class AIState(IntEnum):
    WANDER = 0
    FLEE = 1
    FOLLOW = 2
    SWIM = 3


class Color(NamedTuple):
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255


LIGHTGRAY = Color(200, 200, 200)
GRAY = Color(130, 130, 130)
YELLOW = Color(253, 249, 0)
GOLD = Color(255, 203, 0)
ORANGE = Color(255, 161, 0)
RED = Color(230, 41, 55)
MAROON = Color(190, 33, 55)
GREEN = Color(0, 228, 48)
SKYBLUE = Color(102, 191, 255)
BLUE = Color(0, 121, 241)
DARKBLUE = Color(0, 82, 172)
BROWN = Color(127, 106, 79)
WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)


@dataclass
class InventorySlot:
    """One inventory slot holding either a block stack or a tool."""

    type: BlockType = BlockType.AIR
    tool: ToolType = ToolType.NONE
    count: int = 0
    durability: int = 0

    def clear(self) -> None:
        """Empty the slot entirely."""
        self.type = BlockType.AIR
        self.tool = ToolType.NONE
        self.count = 0
        self.durability = 0


def _slots(size: int) -> list[InventorySlot]:
    return [InventorySlot() for _ in range(size)]


@dataclass
class Player:
    """The player's position, motion, inventory and interaction state."""

    x: int = 0
    y: int = 0
    vel_x: float = 0.0
    vel_y: float = 0.0
    on_ground: bool = False
    in_water: bool = False
    health: int = 100
    inventory: list[InventorySlot] = field(default_factory=lambda: _slots(INVENTORY_SIZE))
    extended_inventory: list[InventorySlot] = field(
        default_factory=lambda: _slots(EXTENDED_INVENTORY_SIZE)
    )
    selected_slot: int = 0
    last_jump_time: float = 0.0
    last_click_time: float = 0.0
    inventory_open: bool = False
    dragged_slot: int = -1
    is_dragging: bool = False
    drag_from_extended: bool = False
    is_breaking: bool = False
    break_start_time: float = 0.0
    break_progress: float = 0.0
    breaking_block_x: int = -1
    breaking_block_y: int = -1
    crafting_open: bool = False


@dataclass
class Animal:
    """A creature roaming the world."""

    type: AnimalType = AnimalType.RABBIT
    x: float = 0.0
    y: float = 0.0
    vel_x: float = 0.0
    vel_y: float = 0.0
    state: AIState = AIState.WANDER
    state_timer: float = 0.0
    direction: float = 1.0
    on_ground: bool = False
    in_water: bool = False
    alive: bool = False
    anim_time: float = 0.0


@dataclass
class Camera:
    """A 2D camera mapping world coordinates to screen coordinates."""

    target_x: float = 0.0
    target_y: float = 0.0
    offset_x: float = SCREEN_WIDTH / 2.0
    offset_y: float = SCREEN_HEIGHT / 2.0
    rotation: float = 0.0
    zoom: float = 1.0

    def world_to_screen(self, x: float, y: float) -> tuple[float, float]:
        """Map a world position to a screen position."""
        angle = math.radians(self.rotation)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        dx, dy = x - self.target_x, y - self.target_y
        rx = dx * cos_a - dy * sin_a
        ry = dx * sin_a + dy * cos_a
        return self.offset_x + rx * self.zoom, self.offset_y + ry * self.zoom

    def screen_to_world(self, x: float, y: float) -> tuple[float, float]:
        """Map a screen position to a world position."""
        angle = math.radians(self.rotation)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        dx = (x - self.offset_x) / self.zoom
        dy = (y - self.offset_y) / self.zoom
        rx = dx * cos_a + dy * sin_a
        ry = -dx * sin_a + dy * cos_a
        return self.target_x + rx, self.target_y + ry


@dataclass(frozen=True)
class Controls:
    """Input state for one frame.

    Keys are lower-case names such as "a", "left", "space", "e", "c" and "1".
    """

    keys_down: frozenset[str] = frozenset()
    keys_pressed: frozenset[str] = frozenset()
    mouse: tuple[float, float] = (0.0, 0.0)
    left_down: bool = False
    left_pressed: bool = False
    right_pressed: bool = False
    wheel: float = 0.0


def _empty_blocks() -> list[list[BlockType]]:
    return [[BlockType.AIR] * WORLD_WIDTH for _ in range(WORLD_HEIGHT)]


def _empty_animals() -> list[Animal]:
    return [Animal() for _ in range(MAX_ANIMALS)]


@dataclass
class World:
    """The block grid, indexed as blocks[y][x], plus everything living in it."""

    blocks: list[list[BlockType]] = field(default_factory=_empty_blocks)
    camera: Camera = field(default_factory=Camera)
    player: Player = field(default_factory=Player)
    animals: list[Animal] = field(default_factory=_empty_animals)
    animal_count: int = 0

    def in_bounds(self, x: int, y: int) -> bool:
        """Whether block coordinates lie inside the world grid."""
        return 0 <= x < WORLD_WIDTH and 0 <= y < WORLD_HEIGHT


_BLOCK_COLORS = {
    BlockType.DIRT: BROWN,
    BlockType.STONE: GRAY,
    BlockType.GRASS: GREEN,
    BlockType.WATER: Color(100, 150, 255, 180),
    BlockType.SAND: YELLOW,
    BlockType.WOOD: Color(139, 69, 19),
    BlockType.LEAVES: Color(50, 170, 50),
    BlockType.COAL_ORE: Color(64, 64, 64),
    BlockType.IRON_ORE: Color(205, 127, 50),
    BlockType.GOLD_ORE: Color(255, 215, 0),
    BlockType.DIAMOND_ORE: Color(185, 242, 255),
    BlockType.EMERALD_ORE: Color(80, 200, 120),
}

_BLOCK_NAMES = {
    BlockType.DIRT: "Dirt",
    BlockType.STONE: "Stone",
    BlockType.GRASS: "Grass",
    BlockType.WATER: "Water",
    BlockType.SAND: "Sand",
    BlockType.WOOD: "Wood",
    BlockType.LEAVES: "Leaves",
    BlockType.COAL_ORE: "Coal Ore",
    BlockType.IRON_ORE: "Iron Ore",
    BlockType.GOLD_ORE: "Gold Ore",
    BlockType.DIAMOND_ORE: "Diamond Ore",
    BlockType.EMERALD_ORE: "Emerald Ore",
}


def is_block_solid(block: BlockType) -> bool:
    """Whether a block stops movement."""
    return block not in (BlockType.AIR, BlockType.WATER)


def block_color(block: BlockType) -> Color:
    """The colour a block is drawn with."""
    return _BLOCK_COLORS.get(block, WHITE)


def block_name(block: BlockType) -> str:
    """The display name of a block."""
    return _BLOCK_NAMES.get(block, "Air")