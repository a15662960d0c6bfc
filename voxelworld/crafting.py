"""Tools, mining speed and crafting recipes."""

from __future__ import annotations

from collections.abc import Iterator
from itertools import chain

from .model import (
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    BlockType,
    Controls,
    InventorySlot,
    Player,
    ToolType,
)

STICKS_NEEDED = 2
MATERIALS_NEEDED = 3

_HARDNESS = {
    BlockType.DIRT: 0.5,
    BlockType.GRASS: 0.6,
    BlockType.SAND: 0.5,
    BlockType.WOOD: 2.0,
    BlockType.LEAVES: 0.2,
    BlockType.STONE: 1.5,
    BlockType.COAL_ORE: 3.0,
    BlockType.IRON_ORE: 3.0,
    BlockType.GOLD_ORE: 3.0,
    BlockType.DIAMOND_ORE: 15.0,
    BlockType.EMERALD_ORE: 3.0,
}

_SPEED = {
    ToolType.NONE: 1.0,
    ToolType.WOODEN_PICKAXE: 2.0,
    ToolType.STONE_PICKAXE: 4.0,
    ToolType.IRON_PICKAXE: 6.0,
    ToolType.GOLD_PICKAXE: 12.0,
    ToolType.DIAMOND_PICKAXE: 8.0,
}

_MIN_TOOL = {
    BlockType.STONE: ToolType.WOODEN_PICKAXE,
    BlockType.COAL_ORE: ToolType.WOODEN_PICKAXE,
    BlockType.IRON_ORE: ToolType.WOODEN_PICKAXE,
    BlockType.GOLD_ORE: ToolType.IRON_PICKAXE,
    BlockType.EMERALD_ORE: ToolType.IRON_PICKAXE,
    BlockType.DIAMOND_ORE: ToolType.IRON_PICKAXE,
}

_NAMES = {
    ToolType.WOODEN_PICKAXE: "Wooden Pickaxe",
    ToolType.STONE_PICKAXE: "Stone Pickaxe",
    ToolType.IRON_PICKAXE: "Iron Pickaxe",
    ToolType.GOLD_PICKAXE: "Gold Pickaxe",
    ToolType.DIAMOND_PICKAXE: "Diamond Pickaxe",
}

_DURABILITY = {
    ToolType.WOODEN_PICKAXE: 60,
    ToolType.STONE_PICKAXE: 132,
    ToolType.IRON_PICKAXE: 251,
    ToolType.GOLD_PICKAXE: 33,
    ToolType.DIAMOND_PICKAXE: 1562,
}

_RECIPE_MATERIAL = {
    ToolType.WOODEN_PICKAXE: BlockType.WOOD,
    ToolType.STONE_PICKAXE: BlockType.STONE,
    ToolType.IRON_PICKAXE: BlockType.IRON_ORE,
    ToolType.GOLD_PICKAXE: BlockType.GOLD_ORE,
    ToolType.DIAMOND_PICKAXE: BlockType.DIAMOND_ORE,
}


def block_hardness(block: BlockType) -> float:
    """How long a block takes to mine by hand, in seconds."""
    return _HARDNESS.get(block, 1.0)


def tool_speed(tool: ToolType) -> float:
    """The mining speed multiplier of a tool."""
    return _SPEED.get(tool, 1.0)


def can_tool_break(tool: ToolType, block: BlockType) -> bool:
    """Whether a tool is good enough to mine a block at full speed."""
    required = _MIN_TOOL.get(block)
    return required is None or tool >= required


def break_time(block: BlockType, tool: ToolType) -> float:
    """Seconds needed to mine a block with a tool."""
    hardness = block_hardness(block)
    if not can_tool_break(tool, block):
        return hardness * 5.0
    return hardness / tool_speed(tool)


def tool_name(tool: ToolType) -> str:
    """The display name of a tool."""
    return _NAMES.get(tool, "No Tool")


def tool_durability(tool: ToolType) -> int:
    """The number of uses a new tool has."""
    return _DURABILITY.get(tool, 0)


def _all_slots(player: Player) -> Iterator[InventorySlot]:
    return chain(player.inventory, player.extended_inventory)


def _count(player: Player, block: BlockType) -> int:
    return sum(slot.count for slot in _all_slots(player) if slot.type == block)


def _take(player: Player, block: BlockType, needed: int) -> None:
    for slot in _all_slots(player):
        if needed <= 0:
            break
        if slot.type == block:
            taken = min(needed, slot.count)
            slot.count -= taken
            needed -= taken
            if slot.count == 0:
                slot.type = BlockType.AIR


def can_craft_tool(player: Player, tool: ToolType) -> bool:
    """Whether the player holds enough wood and material for a tool."""
    material = _RECIPE_MATERIAL.get(tool)
    if material is None:
        return False
    sticks = _count(player, BlockType.WOOD)
    return sticks >= STICKS_NEEDED and _count(player, material) >= MATERIALS_NEEDED


def consume_crafting_materials(player: Player, tool: ToolType) -> None:
    """Remove a tool recipe's ingredients from the player's inventory."""
    material = _RECIPE_MATERIAL.get(tool)
    if material is None:
        return
    sticks = 0 if tool == ToolType.WOODEN_PICKAXE else STICKS_NEEDED
    _take(player, BlockType.WOOD, sticks)
    _take(player, material, MATERIALS_NEEDED)


def add_tool_to_inventory(player: Player, tool: ToolType) -> bool:
    """Put a fresh tool into the first free slot; False if none was free."""
    for slot in _all_slots(player):
        if slot.type == BlockType.AIR or slot.count == 0:
            slot.type = BlockType.AIR
            slot.tool = tool
            slot.count = 1
            slot.durability = tool_durability(tool)
            return True
    return False


def crafting_rect(tool: ToolType) -> tuple[int, int, int, int]:
    """The (x, y, width, height) of a tool's entry in the crafting menu."""
    start_x = SCREEN_WIDTH // 2 - 200
    start_y = SCREEN_HEIGHT // 2 - 150
    return start_x, start_y + (int(tool) - 1) * 60, 400, 50


def _point_in_rect(point: tuple[float, float], rect: tuple[int, int, int, int]) -> bool:
    px, py = point
    x, y, w, h = rect
    return x <= px < x + w and y <= py < y + h


def handle_crafting(player: Player, controls: Controls) -> ToolType | None:
    """Toggle the crafting menu and craft a clicked tool; return what was crafted."""
    if "c" in controls.keys_pressed:
        player.crafting_open = not player.crafting_open
    if not player.crafting_open:
        return None

    crafted = None
    for tool in ToolType:
        if tool == ToolType.NONE:
            continue
        if controls.left_pressed and _point_in_rect(controls.mouse, crafting_rect(tool)):
            if can_craft_tool(player, tool):
                consume_crafting_materials(player, tool)
                add_tool_to_inventory(player, tool)
                crafted = tool
    return crafted