"""Player movement, inventory management and block interaction."""

from __future__ import annotations

import math
from itertools import product

from .crafting import break_time, tool_durability
from .model import (
    BLOCK_SIZE,
    EXTENDED_INVENTORY_SIZE,
    INVENTORY_SIZE,
    MAX_REACH_DISTANCE,
    MAX_STACK,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    WORLD_HEIGHT,
    WORLD_WIDTH,
    BlockType,
    Controls,
    InventorySlot,
    Player,
    ToolType,
    World,
    is_block_solid,
)

PLAYER_WIDTH = 16
PLAYER_HEIGHT = 32
JUMP_COOLDOWN = 0.2

_UP_KEYS = frozenset({"space", "w", "up"})
_DOWN_KEYS = frozenset({"s", "down"})
_LEFT_KEYS = frozenset({"a", "left"})
_RIGHT_KEYS = frozenset({"d", "right"})
_SLOT_KEYS = {str(n): n - 1 for n in range(1, INVENTORY_SIZE + 1)}

_PANEL_SLOT_SIZE = 50
_PANEL_START_X = SCREEN_WIDTH // 2 - 225
_PANEL_START_Y = SCREEN_HEIGHT // 2 - 135


def _block_index(value: int) -> int:
    """Integer division by the block size, truncating toward zero."""
    return int(value / BLOCK_SIZE)


def check_collision(world: World, x: int, y: int) -> bool:
    """Whether a pixel position lies in a solid block or outside the world."""
    block_x = _block_index(x)
    block_y = _block_index(y)
    if not world.in_bounds(block_x, block_y):
        return True
    return is_block_solid(world.blocks[block_y][block_x])


def is_in_water(world: World, x: int, y: int, width: int, height: int) -> bool:
    """Whether any block overlapped by the given box is water."""
    xs = range(_block_index(x), _block_index(x + width - 1) + 1)
    ys = range(_block_index(y), _block_index(y + height - 1) + 1)
    return any(
        world.in_bounds(bx, by) and world.blocks[by][bx] == BlockType.WATER
        for bx, by in product(xs, ys)
    )


def create_player() -> Player:
    """A player at the spawn point with the starting inventory."""
    player = Player(x=WORLD_WIDTH * BLOCK_SIZE // 2, y=20 * BLOCK_SIZE)
    hotbar = player.inventory
    hotbar[0] = InventorySlot(BlockType.DIRT, count=64)
    hotbar[1] = InventorySlot(BlockType.STONE, count=32)
    hotbar[2] = InventorySlot(BlockType.WOOD, count=16)
    hotbar[3] = InventorySlot(BlockType.SAND, count=24)
    hotbar[4] = InventorySlot(
        BlockType.AIR,
        ToolType.WOODEN_PICKAXE,
        count=1,
        durability=tool_durability(ToolType.WOODEN_PICKAXE),
    )
    extended = player.extended_inventory
    extended[0] = InventorySlot(BlockType.COAL_ORE, count=5)
    extended[1] = InventorySlot(BlockType.IRON_ORE, count=3)
    extended[2] = InventorySlot(BlockType.GOLD_ORE, count=2)
    return player


def _box_collides(world: World, x: int, y: int) -> bool:
    return any(
        check_collision(world, x + dx, y + dy)
        for dx in (0, PLAYER_WIDTH - 1)
        for dy in (0, PLAYER_HEIGHT - 1)
    )


def update_player(world: World, controls: Controls, delta_time: float, now: float) -> None:
    """Advance the player's movement by one frame and follow it with the camera."""
    player = world.player
    player.in_water = is_in_water(world, player.x, player.y, PLAYER_WIDTH, PLAYER_HEIGHT)
    in_water = player.in_water

    speed = 150.0 if in_water else 250.0
    jump_force = 200.0 if in_water else 450.0
    gravity = 200.0 if in_water else 900.0
    keys = controls.keys_down

    if keys & _LEFT_KEYS:
        player.vel_x = -speed
    elif keys & _RIGHT_KEYS:
        player.vel_x = speed
    else:
        player.vel_x *= 0.7 if in_water else 0.85

    if in_water:
        if keys & _UP_KEYS:
            player.vel_y = -jump_force
        elif keys & _DOWN_KEYS:
            player.vel_y = jump_force
        else:
            player.vel_y *= 0.8
    elif keys & _UP_KEYS and player.on_ground and now - player.last_jump_time > JUMP_COOLDOWN:
        player.vel_y = -jump_force
        player.on_ground = False
        player.last_jump_time = now

    if in_water:
        player.vel_y += gravity * delta_time * 0.3
        player.vel_y = max(-200.0, min(200.0, player.vel_y))
    else:
        player.vel_y += gravity * delta_time
        player.vel_y = min(player.vel_y, 600.0)

    new_x = player.x + int(player.vel_x * delta_time)
    new_y = player.y + int(player.vel_y * delta_time)

    if _box_collides(world, new_x, player.y):
        player.vel_x = 0.0
    else:
        player.x = new_x

    if _box_collides(world, player.x, new_y):
        if player.vel_y > 0 and not in_water:
            player.on_ground = True
        player.vel_y = 0.0
    else:
        player.y = new_y
        if not in_water:
            player.on_ground = False

    world.camera.target_x = player.x + PLAYER_WIDTH / 2
    world.camera.target_y = player.y + PLAYER_HEIGHT / 2


def _stack_onto(slots: list[InventorySlot], block: BlockType) -> bool:
    for slot in slots:
        if (
            slot.type == block
            and slot.tool == ToolType.NONE
            and 0 < slot.count < MAX_STACK
        ):
            slot.count += 1
            return True
    return False


def _place_in_empty(slots: list[InventorySlot], block: BlockType) -> bool:
    for slot in slots:
        if slot.type == BlockType.AIR or slot.count == 0:
            slot.type = block
            slot.tool = ToolType.NONE
            slot.count = 1
            slot.durability = 0
            return True
    return False


def add_to_inventory(player: Player, block: BlockType) -> bool:
    """Add one block, preferring the hotbar and existing stacks; False if full."""
    return (
        _stack_onto(player.inventory, block)
        or _place_in_empty(player.inventory, block)
        or _stack_onto(player.extended_inventory, block)
        or _place_in_empty(player.extended_inventory, block)
    )


def remove_from_inventory(player: Player, block: BlockType) -> bool:
    """Take one block from the first hotbar stack holding it."""
    for slot in player.inventory:
        if slot.type == block and slot.count > 0:
            slot.count -= 1
            if slot.count == 0:
                slot.type = BlockType.AIR
            return True
    return False


def handle_inventory_input(player: Player, controls: Controls) -> None:
    """Toggle the inventory and change the selected hotbar slot."""
    if "e" in controls.keys_pressed:
        player.inventory_open = not player.inventory_open
    if player.inventory_open:
        return

    for key, slot in _SLOT_KEYS.items():
        if key in controls.keys_pressed:
            player.selected_slot = slot

    if controls.wheel != 0:
        player.selected_slot -= int(controls.wheel)
        if player.selected_slot < 0:
            player.selected_slot = INVENTORY_SIZE - 1
        if player.selected_slot >= INVENTORY_SIZE:
            player.selected_slot = 0


def _point_in_rect(point: tuple[float, float], x: int, y: int, w: int, h: int) -> bool:
    px, py = point
    return x <= px < x + w and y <= py < y + h


def _hotbar_slot_at(point: tuple[float, float]) -> int | None:
    for i in range(INVENTORY_SIZE):
        x = _PANEL_START_X + (i % 9) * _PANEL_SLOT_SIZE
        y = _PANEL_START_Y + 180
        if _point_in_rect(point, x, y, _PANEL_SLOT_SIZE, _PANEL_SLOT_SIZE):
            return i
    return None


def _extended_slot_at(point: tuple[float, float]) -> int | None:
    for i in range(EXTENDED_INVENTORY_SIZE):
        row, col = divmod(i, 9)
        x = _PANEL_START_X + col * _PANEL_SLOT_SIZE
        y = _PANEL_START_Y + row * _PANEL_SLOT_SIZE
        if _point_in_rect(point, x, y, _PANEL_SLOT_SIZE, _PANEL_SLOT_SIZE):
            return i
    return None


def _drop_or_pick(player: Player, slots: list[InventorySlot], index: int, extended: bool) -> None:
    if player.is_dragging:
        source = player.extended_inventory if player.drag_from_extended else player.inventory
        source[player.dragged_slot], slots[index] = slots[index], source[player.dragged_slot]
        player.is_dragging = False
        player.dragged_slot = -1
    else:
        player.is_dragging = True
        player.dragged_slot = index
        player.drag_from_extended = extended


def handle_extended_inventory(player: Player, controls: Controls) -> None:
    """Pick up and drop items between slots while the inventory is open."""
    if not player.inventory_open or not controls.left_pressed:
        return

    index = _hotbar_slot_at(controls.mouse)
    if index is not None:
        _drop_or_pick(player, player.inventory, index, extended=False)
        return

    index = _extended_slot_at(controls.mouse)
    if index is not None:
        _drop_or_pick(player, player.extended_inventory, index, extended=True)
        return

    player.is_dragging = False
    player.dragged_slot = -1


def _stop_breaking(player: Player) -> None:
    player.is_breaking = False
    player.break_progress = 0.0


def handle_block_interaction(world: World, controls: Controls, now: float) -> None:
    """Mine the block under the mouse with the left button, place with the right."""
    player = world.player
    mouse_x, mouse_y = world.camera.screen_to_world(*controls.mouse)
    block_x = int(mouse_x / BLOCK_SIZE)
    block_y = int(mouse_y / BLOCK_SIZE)

    if not (0 <= block_x < WORLD_WIDTH and 0 <= block_y < WORLD_HEIGHT):
        _stop_breaking(player)
        return

    distance = math.hypot(
        mouse_x - (player.x + PLAYER_WIDTH / 2), mouse_y - (player.y + PLAYER_HEIGHT / 2)
    )
    if distance >= MAX_REACH_DISTANCE:
        _stop_breaking(player)
        return

    row = world.blocks[block_y]
    selected = player.inventory[player.selected_slot]

    if controls.left_down:
        target = row[block_x]
        if target != BlockType.AIR:
            current_tool = selected.tool
            needed = break_time(target, current_tool)

            if (
                not player.is_breaking
                or player.breaking_block_x != block_x
                or player.breaking_block_y != block_y
            ):
                player.is_breaking = True
                player.break_start_time = now
                player.break_progress = 0.0
                player.breaking_block_x = block_x
                player.breaking_block_y = block_y

            player.break_progress = (now - player.break_start_time) / needed

            if player.break_progress >= 1.0:
                add_to_inventory(player, target)
                row[block_x] = BlockType.AIR
                if current_tool != ToolType.NONE:
                    slot = player.inventory[player.selected_slot]
                    slot.durability -= 1
                    if slot.durability <= 0:
                        slot.tool = ToolType.NONE
                        slot.count = 0
                        slot.type = BlockType.AIR
                _stop_breaking(player)
    else:
        _stop_breaking(player)

    if controls.right_pressed and row[block_x] == BlockType.AIR:
        slot = player.inventory[player.selected_slot]
        if slot.type != BlockType.AIR and slot.tool == ToolType.NONE and slot.count > 0:
            row[block_x] = slot.type
            slot.count -= 1
            if slot.count == 0:
                slot.type = BlockType.AIR