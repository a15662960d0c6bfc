import pytest

from voxelworld.crafting import (
    add_tool_to_inventory,
    block_hardness,
    break_time,
    can_craft_tool,
    can_tool_break,
    consume_crafting_materials,
    crafting_rect,
    handle_crafting,
    tool_durability,
    tool_name,
    tool_speed,
)
from voxelworld.model import (
    BlockType,
    Controls,
    InventorySlot,
    Player,
    ToolType,
)


def _player_with(*stacks, extended=()):
    player = Player()
    for slot, (block, count) in zip(player.inventory, stacks):
        slot.type = block
        slot.count = count
    for slot, (block, count) in zip(player.extended_inventory, extended):
        slot.type = block
        slot.count = count
    return player


def _total(player, block):
    return sum(
        s.count
        for s in player.inventory + player.extended_inventory
        if s.type == block
    )


def _click(tool, pressed=frozenset()):
    x, y, _, _ = crafting_rect(tool)
    return Controls(keys_pressed=pressed, mouse=(x + 1, y + 1), left_pressed=True)


def test_tool_names():
    assert tool_name(ToolType.WOODEN_PICKAXE) == "Wooden Pickaxe"
    assert tool_name(ToolType.DIAMOND_PICKAXE) == "Diamond Pickaxe"
    assert tool_name(ToolType.NONE) == "No Tool"


def test_tool_durability():
    assert tool_durability(ToolType.DIAMOND_PICKAXE) == 1562
    assert tool_durability(ToolType.IRON_PICKAXE) == 251
    assert tool_durability(ToolType.NONE) == 0


def test_gold_is_fastest_and_bare_hand_slowest():
    speeds = {t: tool_speed(t) for t in ToolType}
    assert max(speeds, key=speeds.get) == ToolType.GOLD_PICKAXE
    assert min(speeds, key=speeds.get) == ToolType.NONE


def test_diamond_ore_is_hardest():
    hardness = {block: block_hardness(block) for block in BlockType}
    assert max(hardness, key=hardness.get) == BlockType.DIAMOND_ORE
    assert block_hardness(BlockType.DIAMOND_ORE) == pytest.approx(15.0)


@pytest.mark.parametrize(
    "tool, block, expected",
    [
        (ToolType.NONE, BlockType.DIRT, True),
        (ToolType.NONE, BlockType.STONE, False),
        (ToolType.WOODEN_PICKAXE, BlockType.STONE, True),
        (ToolType.WOODEN_PICKAXE, BlockType.IRON_ORE, True),
        (ToolType.STONE_PICKAXE, BlockType.GOLD_ORE, False),
        (ToolType.IRON_PICKAXE, BlockType.GOLD_ORE, True),
        (ToolType.STONE_PICKAXE, BlockType.DIAMOND_ORE, False),
        (ToolType.IRON_PICKAXE, BlockType.DIAMOND_ORE, True),
        (ToolType.DIAMOND_PICKAXE, BlockType.EMERALD_ORE, True),
    ],
)
def test_can_tool_break(tool, block, expected):
    assert can_tool_break(tool, block) is expected


def test_bare_hand_on_dirt_takes_hardness():
    assert break_time(BlockType.DIRT, ToolType.NONE) == block_hardness(BlockType.DIRT)


def test_wrong_tool_is_slower_than_hardness():
    assert break_time(BlockType.STONE, ToolType.NONE) > block_hardness(BlockType.STONE)


def test_better_tools_mine_faster():
    wooden = break_time(BlockType.STONE, ToolType.WOODEN_PICKAXE)
    stone = break_time(BlockType.STONE, ToolType.STONE_PICKAXE)
    iron = break_time(BlockType.STONE, ToolType.IRON_PICKAXE)
    gold = break_time(BlockType.STONE, ToolType.GOLD_PICKAXE)
    assert wooden > stone > iron > gold


def test_empty_player_cannot_craft():
    player = Player()
    assert not any(can_craft_tool(player, tool) for tool in ToolType)


def test_wooden_pickaxe_needs_three_wood():
    assert can_craft_tool(_player_with((BlockType.WOOD, 3)), ToolType.WOODEN_PICKAXE)
    assert not can_craft_tool(_player_with((BlockType.WOOD, 2)), ToolType.WOODEN_PICKAXE)


def test_stone_pickaxe_needs_wood_and_stone():
    player = _player_with((BlockType.WOOD, 2), (BlockType.STONE, 3))
    assert can_craft_tool(player, ToolType.STONE_PICKAXE)
    assert not can_craft_tool(_player_with((BlockType.STONE, 3)), ToolType.STONE_PICKAXE)
    assert not can_craft_tool(player, ToolType.IRON_PICKAXE)


def test_materials_counted_across_both_inventories():
    player = _player_with(
        (BlockType.WOOD, 1),
        (BlockType.IRON_ORE, 1),
        extended=[(BlockType.WOOD, 1), (BlockType.IRON_ORE, 2)],
    )
    assert can_craft_tool(player, ToolType.IRON_PICKAXE)


def test_cannot_craft_no_tool():
    player = _player_with((BlockType.WOOD, 64))
    assert can_craft_tool(player, ToolType.NONE) is False


def test_consume_wooden_pickaxe_takes_only_three_wood():
    player = _player_with((BlockType.WOOD, 10))
    before = _total(player, BlockType.WOOD)
    consume_crafting_materials(player, ToolType.WOODEN_PICKAXE)
    assert before - _total(player, BlockType.WOOD) == 3


def test_consume_stone_pickaxe_takes_wood_and_stone():
    player = _player_with((BlockType.WOOD, 10), (BlockType.STONE, 10))
    wood, stone = _total(player, BlockType.WOOD), _total(player, BlockType.STONE)
    consume_crafting_materials(player, ToolType.STONE_PICKAXE)
    assert wood - _total(player, BlockType.WOOD) == 2
    assert stone - _total(player, BlockType.STONE) == 3


def test_consume_spills_into_extended_and_clears_empty_slots():
    player = _player_with(
        (BlockType.WOOD, 2),
        (BlockType.GOLD_ORE, 1),
        extended=[(BlockType.GOLD_ORE, 5)],
    )
    consume_crafting_materials(player, ToolType.GOLD_PICKAXE)
    assert player.inventory[0] == InventorySlot()
    assert player.inventory[1] == InventorySlot()
    assert _total(player, BlockType.GOLD_ORE) == 5 + 1 - 3


def test_consume_no_tool_changes_nothing():
    player = _player_with((BlockType.WOOD, 5))
    consume_crafting_materials(player, ToolType.NONE)
    assert _total(player, BlockType.WOOD) == 5


def test_add_tool_fills_first_free_slot():
    player = _player_with((BlockType.DIRT, 5))
    assert add_tool_to_inventory(player, ToolType.IRON_PICKAXE) is True
    slot = player.inventory[1]
    assert slot.tool == ToolType.IRON_PICKAXE
    assert slot.count == 1
    assert slot.durability == tool_durability(ToolType.IRON_PICKAXE)


def test_add_tool_uses_extended_when_hotbar_full():
    player = _player_with(*[(BlockType.DIRT, 1)] * 9)
    assert add_tool_to_inventory(player, ToolType.STONE_PICKAXE) is True
    assert player.extended_inventory[0].tool == ToolType.STONE_PICKAXE


def test_add_tool_fails_when_everything_full():
    player = _player_with(*[(BlockType.DIRT, 1)] * 9, extended=[(BlockType.SAND, 1)] * 27)
    assert add_tool_to_inventory(player, ToolType.STONE_PICKAXE) is False


def test_crafting_rects_do_not_overlap():
    rects = [crafting_rect(t) for t in ToolType if t != ToolType.NONE]
    for (x1, y1, w1, h1), (x2, y2, _, _) in zip(rects, rects[1:]):
        assert x1 == x2
        assert y1 + h1 <= y2


def test_handle_crafting_toggles_menu():
    player = Player()
    handle_crafting(player, Controls(keys_pressed=frozenset({"c"})))
    assert player.crafting_open is True
    handle_crafting(player, Controls(keys_pressed=frozenset({"c"})))
    assert player.crafting_open is False


def test_handle_crafting_crafts_clicked_tool():
    player = _player_with((BlockType.WOOD, 5), (BlockType.STONE, 3))
    player.crafting_open = True
    crafted = handle_crafting(player, _click(ToolType.STONE_PICKAXE))
    assert crafted == ToolType.STONE_PICKAXE
    tools = [s.tool for s in player.inventory + player.extended_inventory]
    assert ToolType.STONE_PICKAXE in tools
    assert _total(player, BlockType.STONE) == 0


def test_handle_crafting_ignores_clicks_when_closed():
    player = _player_with((BlockType.WOOD, 5))
    crafted = handle_crafting(player, _click(ToolType.WOODEN_PICKAXE))
    assert crafted is None
    assert _total(player, BlockType.WOOD) == 5


def test_handle_crafting_without_materials_crafts_nothing():
    player = Player()
    player.crafting_open = True
    assert handle_crafting(player, _click(ToolType.DIAMOND_PICKAXE)) is None
    assert all(s.tool == ToolType.NONE for s in player.inventory)