"""Drawing of the world, the player, animals and the user interface."""

from __future__ import annotations

import math
import random
from functools import lru_cache

import pygame

from .animals import animal_color, animal_name, animal_size
from .crafting import can_craft_tool, crafting_rect, tool_durability, tool_name
from .model import (
    BLACK,
    BLOCK_SIZE,
    BLUE,
    BROWN,
    DARKBLUE,
    EXTENDED_INVENTORY_SIZE,
    GOLD,
    GRAY,
    GREEN,
    INVENTORY_SIZE,
    LIGHTGRAY,
    MAROON,
    MAX_ANIMALS,
    MAX_REACH_DISTANCE,
    ORANGE,
    RED,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SKYBLUE,
    WHITE,
    WORLD_HEIGHT,
    WORLD_WIDTH,
    YELLOW,
    AnimalType,
    BlockType,
    Camera,
    Color,
    ToolType,
    World,
    block_color,
    block_name,
)

OVERLAY = Color(0, 0, 0, 150)
BUBBLE = Color(200, 230, 255, 150)
_TUFTS = (
    (4, 8, 8, 16, Color(60, 180, 60)),
    (12, 4, 6, 20, Color(40, 160, 40)),
    (20, 12, 8, 12, Color(80, 200, 80)),
)
_TOOL_COLORS = {
    ToolType.STONE_PICKAXE: GRAY,
    ToolType.IRON_PICKAXE: LIGHTGRAY,
    ToolType.GOLD_PICKAXE: GOLD,
    ToolType.DIAMOND_PICKAXE: SKYBLUE,
}
_RECIPE_TEXT = {
    ToolType.WOODEN_PICKAXE: "3 Wood",
    ToolType.STONE_PICKAXE: "3 Stone + 2 Wood",
    ToolType.IRON_PICKAXE: "3 Iron Ore + 2 Wood",
    ToolType.GOLD_PICKAXE: "3 Gold Ore + 2 Wood",
    ToolType.DIAMOND_PICKAXE: "3 Diamond Ore + 2 Wood",
}

_PANEL_SLOT = 50
_PANEL_X = SCREEN_WIDTH // 2 - 225
_PANEL_Y = SCREEN_HEIGHT // 2 - 135


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


def _text(surface: pygame.Surface, text: str, x: float, y: float, size: int, color: Color) -> None:
    rendered = _font(size).render(text, True, tuple(color[:3]))
    surface.blit(rendered, (int(x), int(y)))


def _measure(text: str, size: int) -> int:
    return _font(size).size(text)[0]


def _fill(surface: pygame.Surface, rect: pygame.Rect, color: Color) -> None:
    if rect.width <= 0 or rect.height <= 0:
        return
    if color[3] < 255:
        layer = pygame.Surface(rect.size, pygame.SRCALPHA)
        layer.fill(tuple(color))
        surface.blit(layer, rect.topleft)
    else:
        pygame.draw.rect(surface, tuple(color[:3]), rect)


def _outline(surface: pygame.Surface, rect: pygame.Rect, thickness: int, color: Color) -> None:
    pygame.draw.rect(surface, tuple(color[:3]), rect, thickness)


def _circle(surface: pygame.Surface, x: float, y: float, radius: int, color: Color) -> None:
    if color[3] < 255:
        size = radius * 2 + 1
        layer = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.circle(layer, tuple(color), (radius, radius), radius)
        surface.blit(layer, (int(x) - radius, int(y) - radius))
    else:
        pygame.draw.circle(surface, tuple(color[:3]), (int(x), int(y)), radius)


def _world_rect(camera: Camera, x: float, y: float, w: float, h: float) -> pygame.Rect:
    sx, sy = camera.world_to_screen(x, y)
    return pygame.Rect(int(sx), int(sy), int(w * camera.zoom), int(h * camera.zoom))


def _world_circle(
    surface: pygame.Surface, camera: Camera, x: float, y: float, radius: int, color: Color
) -> None:
    sx, sy = camera.world_to_screen(x, y)
    _circle(surface, sx, sy, max(1, int(radius * camera.zoom)), color)


def visible_block_range(camera: Camera) -> tuple[range, range]:
    """The block columns and rows the camera can see, clamped to the world."""
    start_x = int((camera.target_x - SCREEN_WIDTH // 2) / BLOCK_SIZE) - 1
    end_x = int((camera.target_x + SCREEN_WIDTH // 2) / BLOCK_SIZE) + 1
    start_y = int((camera.target_y - SCREEN_HEIGHT // 2) / BLOCK_SIZE) - 1
    end_y = int((camera.target_y + SCREEN_HEIGHT // 2) / BLOCK_SIZE) + 1
    start_x = max(0, start_x)
    end_x = min(WORLD_WIDTH - 1, end_x)
    start_y = max(0, start_y)
    end_y = min(WORLD_HEIGHT - 1, end_y)
    return range(start_x, end_x + 1), range(start_y, end_y + 1)


def _is_grass_patch(world: World, x: int, y: int) -> bool:
    return (
        world.blocks[y][x] == BlockType.LEAVES
        and y < WORLD_HEIGHT - 1
        and world.blocks[y + 1][x] in (BlockType.GRASS, BlockType.DIRT)
    )


def hovered_block_name(world: World, block_x: int, block_y: int) -> str | None:
    """The label shown for a block under the cursor; None for air or outside the world."""
    if not world.in_bounds(block_x, block_y):
        return None
    block = world.blocks[block_y][block_x]
    if block == BlockType.AIR:
        return None
    if _is_grass_patch(world, block_x, block_y):
        return "Grass Patch"
    return block_name(block)


def draw_world(surface: pygame.Surface, world: World) -> None:
    """Draw every visible block."""
    camera = world.camera
    xs, ys = visible_block_range(camera)
    for y in ys:
        row = world.blocks[y]
        for x in xs:
            block = row[x]
            if block == BlockType.AIR:
                continue
            px, py = x * BLOCK_SIZE, y * BLOCK_SIZE
            rect = _world_rect(camera, px, py, BLOCK_SIZE, BLOCK_SIZE)
            if block == BlockType.WATER:
                _fill(surface, rect, block_color(block))
            elif _is_grass_patch(world, x, y):
                for dx, dy, w, h, color in _TUFTS:
                    _fill(surface, _world_rect(camera, px + dx, py + dy, w, h), color)
            else:
                _fill(surface, rect, block_color(block))
                _outline(surface, rect, 1, BLACK)


def draw_player(surface: pygame.Surface, world: World, now: float, rng: random.Random) -> None:
    """Draw the player, with bubbles while swimming."""
    camera = world.camera
    player = world.player
    body = _world_rect(camera, player.x, player.y, 16, 32)
    _fill(surface, body, BLUE if player.in_water else RED)
    _outline(surface, body, 2, DARKBLUE if player.in_water else MAROON)
    _world_circle(surface, camera, player.x + 8, player.y + 8, 3, WHITE)

    if player.in_water:
        for i in range(3):
            bubble_x = player.x + rng.randint(-5, 20)
            bubble_y = player.y + rng.randint(0, 32)
            anim_offset = (int(now * 20) + i * 10) % 40
            _world_circle(surface, camera, bubble_x, bubble_y - anim_offset, 2, BUBBLE)


def draw_animals(surface: pygame.Surface, world: World, rng: random.Random) -> None:
    """Draw every living animal with its ears, wings or comb."""
    camera = world.camera
    for animal in world.animals:
        if not animal.alive:
            continue
        color = animal_color(animal.type, rng)
        width, height = animal_size(animal.type)
        x, y = animal.x, animal.y

        body = _world_rect(camera, x, y, width, height)
        _fill(surface, body, color)
        _outline(surface, body, 1, BLACK)

        eye_offset = int(animal.anim_time * 10) % 2
        _world_circle(surface, camera, int(x + width - 3), int(y + 2 + eye_offset), 1, BLACK)

        if animal.type == AnimalType.RABBIT:
            _fill(surface, _world_rect(camera, int(x + 2), int(y - 3), 2, 4), color)
            _fill(surface, _world_rect(camera, int(x + 6), int(y - 3), 2, 4), color)
        elif animal.type == AnimalType.BIRD:
            wing_flap = int(animal.anim_time * 15) % 3
            _fill(surface, _world_rect(camera, int(x - 2), int(y + 2 - wing_flap), 4, 2), color)
            _fill(surface, _world_rect(camera, int(x + width), int(y + 2 - wing_flap), 4, 2), color)
        elif animal.type == AnimalType.CHICKEN:
            _fill(surface, _world_rect(camera, int(x + width // 2 - 1), int(y - 2), 2, 3), RED)


def _durability_width(full: int, durability: int, tool: ToolType) -> int:
    maximum = tool_durability(tool)
    return int(full * durability / maximum) if maximum else 0


def draw_inventory(surface: pygame.Surface, world: World) -> None:
    """Draw the hotbar along the bottom of the screen."""
    player = world.player
    slot_size = 60
    start_x = SCREEN_WIDTH // 2 - (INVENTORY_SIZE * slot_size) // 2
    start_y = SCREEN_HEIGHT - slot_size - 10

    for i, slot in enumerate(player.inventory):
        x = start_x + i * slot_size
        rect = pygame.Rect(x, start_y, slot_size, slot_size)
        _fill(surface, rect, YELLOW if i == player.selected_slot else LIGHTGRAY)
        _outline(surface, rect, 2, BLACK)

        if slot.tool != ToolType.NONE:
            tool_rect = pygame.Rect(x + 5, start_y + 5, slot_size - 10, slot_size - 30)
            _fill(surface, tool_rect, _TOOL_COLORS.get(slot.tool, BROWN))
            _outline(surface, tool_rect, 1, BLACK)
            full = slot_size - 10
            bar = _durability_width(full, slot.durability, slot.tool)
            bar_y = start_y + slot_size - 25
            _fill(surface, pygame.Rect(x + 5, bar_y, bar, 5), GREEN)
            _fill(surface, pygame.Rect(x + 5 + bar, bar_y, full - bar, 5), RED)
        elif slot.type != BlockType.AIR and slot.count > 0:
            block_rect = pygame.Rect(x + 5, start_y + 5, slot_size - 10, slot_size - 30)
            _fill(surface, block_rect, block_color(slot.type))
            _outline(surface, block_rect, 1, BLACK)
            _text(surface, str(slot.count), x + 5, start_y + slot_size - 20, 16, WHITE)

        _text(surface, str(i + 1), x + 2, start_y + 2, 12, BLACK)


def draw_extended_inventory(
    surface: pygame.Surface, world: World, mouse: tuple[float, float]
) -> None:
    """Draw the open inventory panel and any item being dragged."""
    player = world.player
    _fill(surface, pygame.Rect(0, 0, SCREEN_WIDTH, SCREEN_HEIGHT), OVERLAY)

    slot_size = _PANEL_SLOT
    _text(surface, "Extended Inventory", _PANEL_X, _PANEL_Y - 30, 20, WHITE)
    _text(surface, "Press E to close", _PANEL_X + 300, _PANEL_Y - 30, 16, WHITE)

    for i, slot in enumerate(player.extended_inventory[:EXTENDED_INVENTORY_SIZE]):
        row, col = divmod(i, 9)
        rect = pygame.Rect(
            _PANEL_X + col * slot_size, _PANEL_Y + row * slot_size, slot_size, slot_size
        )
        dragged = player.is_dragging and player.drag_from_extended and player.dragged_slot == i
        _fill(surface, rect, YELLOW if dragged else LIGHTGRAY)
        _outline(surface, rect, 2, BLACK)

        if slot.tool != ToolType.NONE:
            tool_rect = pygame.Rect(rect.x + 5, rect.y + 5, slot_size - 10, slot_size - 20)
            _fill(surface, tool_rect, _TOOL_COLORS.get(slot.tool, BROWN))
            _outline(surface, tool_rect, 1, BLACK)
            full = slot_size - 10
            bar = _durability_width(full, slot.durability, slot.tool)
            bar_y = rect.y + slot_size - 20
            _fill(surface, pygame.Rect(rect.x + 5, bar_y, bar, 4), GREEN)
            _fill(surface, pygame.Rect(rect.x + 5 + bar, bar_y, full - bar, 4), RED)
        elif slot.type != BlockType.AIR and slot.count > 0:
            block_rect = pygame.Rect(rect.x + 5, rect.y + 5, slot_size - 10, slot_size - 20)
            _fill(surface, block_rect, block_color(slot.type))
            _outline(surface, block_rect, 1, BLACK)
            _text(surface, str(slot.count), rect.x + 5, rect.y + slot_size - 15, 12, WHITE)

    _text(surface, "Hotbar", _PANEL_X, _PANEL_Y + 160, 16, WHITE)

    for i, slot in enumerate(player.inventory):
        rect = pygame.Rect(_PANEL_X + i * slot_size, _PANEL_Y + 180, slot_size, slot_size)
        color = YELLOW if i == player.selected_slot else LIGHTGRAY
        if player.is_dragging and not player.drag_from_extended and player.dragged_slot == i:
            color = ORANGE
        _fill(surface, rect, color)
        _outline(surface, rect, 2, BLACK)

        if slot.type != BlockType.AIR and slot.count > 0:
            block_rect = pygame.Rect(rect.x + 5, rect.y + 5, slot_size - 10, slot_size - 20)
            _fill(surface, block_rect, block_color(slot.type))
            _outline(surface, block_rect, 1, BLACK)
            _text(surface, str(slot.count), rect.x + 5, rect.y + slot_size - 15, 12, WHITE)

        _text(surface, str(i + 1), rect.x + 2, rect.y + 2, 10, BLACK)

    if player.is_dragging:
        source = player.extended_inventory if player.drag_from_extended else player.inventory
        item = source[player.dragged_slot]
        if item.type != BlockType.AIR and item.count > 0:
            mx, my = mouse
            drag_rect = pygame.Rect(int(mx - 15), int(my - 15), 30, 30)
            _fill(surface, drag_rect, block_color(item.type))
            _outline(surface, drag_rect, 2, WHITE)


def draw_crafting(surface: pygame.Surface, world: World) -> None:
    """Draw the crafting menu, marking which tools can be made."""
    player = world.player
    _fill(surface, pygame.Rect(0, 0, SCREEN_WIDTH, SCREEN_HEIGHT), OVERLAY)

    start_x = SCREEN_WIDTH // 2 - 200
    start_y = SCREEN_HEIGHT // 2 - 150
    _text(surface, "Crafting Menu", start_x, start_y - 30, 20, WHITE)
    _text(surface, "Press C to close", start_x + 300, start_y - 30, 16, WHITE)

    for tool in ToolType:
        if tool == ToolType.NONE:
            continue
        rect = pygame.Rect(*crafting_rect(tool))
        can_craft = can_craft_tool(player, tool)
        color = GREEN if can_craft else GRAY
        _fill(surface, rect, Color(color.r, color.g, color.b, 100))
        _outline(surface, rect, 2, color)

        _text(surface, tool_name(tool), rect.x + 10, rect.y + 5, 16, WHITE)
        _text(surface, _RECIPE_TEXT[tool], rect.x + 10, rect.y + 25, 14, LIGHTGRAY)
        if can_craft:
            _text(surface, "Click to Craft", rect.x + 300, rect.y + 15, 14, WHITE)
        else:
            _text(surface, "Missing Materials", rect.x + 280, rect.y + 15, 14, RED)


def draw_ui(
    surface: pygame.Surface, world: World, mouse: tuple[float, float], rng: random.Random
) -> None:
    """Draw the screen-space interface: help, labels, hotbar, menus and mining progress.

    ``rng`` is accepted so every draw call shares one signature shape; nothing here is random.
    """
    del rng
    player = world.player
    camera = world.camera
    _text(surface, "2D Voxel World", 10, 10, 20, WHITE)

    if not player.inventory_open and not player.crafting_open:
        _text(surface, "WASD: Move, E: Inventory, C: Crafting", 10, 40, 14, WHITE)
        _text(surface, "Left Click: Mine, Right Click: Place", 10, 60, 14, WHITE)
        _text(surface, "1-9: Select, Mouse Wheel: Scroll", 10, 80, 14, WHITE)
        if player.in_water:
            _text(surface, "Swimming: S to dive, W/Space to swim up", 10, 100, 14, BLUE)

    _text(surface, f"Animals: {world.animal_count}/{MAX_ANIMALS}", SCREEN_WIDTH - 200, 10, 16, WHITE)

    selected = player.inventory[player.selected_slot]
    if selected.tool != ToolType.NONE:
        text = (
            f"{tool_name(selected.tool)} "
            f"({selected.durability}/{tool_durability(selected.tool)})"
        )
        _text(surface, text, SCREEN_WIDTH - 300, 30, 14, WHITE)

    mouse_x, mouse_y = camera.screen_to_world(*mouse)
    block_x = int(mouse_x / BLOCK_SIZE)
    block_y = int(mouse_y / BLOCK_SIZE)

    for animal in world.animals:
        if not animal.alive:
            continue
        if math.hypot(mouse_x - (animal.x + 6), mouse_y - (animal.y + 6)) < 20:
            sx, sy = camera.world_to_screen(animal.x + 6, animal.y - 10)
            name = animal_name(animal.type)
            _text(surface, name, sx - _measure(name, 12) // 2, sy, 12, YELLOW)
            _outline(surface, _world_rect(camera, animal.x - 2, animal.y - 2, 16, 16), 2, YELLOW)

    if world.in_bounds(block_x, block_y):
        distance = math.hypot(mouse_x - (player.x + 8), mouse_y - (player.y + 16))
        if distance < MAX_REACH_DISTANCE:
            wx, wy = block_x * BLOCK_SIZE, block_y * BLOCK_SIZE
            _outline(surface, _world_rect(camera, wx, wy, BLOCK_SIZE, BLOCK_SIZE), 3, WHITE)
            name = hovered_block_name(world, block_x, block_y)
            if name is not None:
                sx, sy = camera.world_to_screen(wx + BLOCK_SIZE // 2, wy - 10)
                _text(surface, name, sx - _measure(name, 12) // 2, sy, 12, WHITE)

    if selected.type != BlockType.AIR and selected.tool == ToolType.NONE:
        text = f"Selected: {block_name(selected.type)} ({selected.count})"
        _text(surface, text, SCREEN_WIDTH - 300, 70, 14, WHITE)

    draw_inventory(surface, world)
    if player.inventory_open:
        draw_extended_inventory(surface, world, mouse)
    if player.crafting_open:
        draw_crafting(surface, world)

    if player.is_breaking:
        sx, sy = camera.world_to_screen(
            player.breaking_block_x * BLOCK_SIZE, player.breaking_block_y * BLOCK_SIZE
        )
        progress = int(BLOCK_SIZE * player.break_progress)
        _fill(surface, pygame.Rect(int(sx), int(sy) - 8, progress, 6), GREEN)
        _outline(surface, pygame.Rect(int(sx), int(sy) - 8, BLOCK_SIZE, 6), 1, WHITE)