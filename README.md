# voxelworld

A small side-on voxel sandbox. At start-up a 200 × 100 block world is
generated: grass, dirt and stone shaped by height noise, with caves, four
lakes, a river, trees, tufts of grass and ores buried deep down. Rabbits,
birds, pigs and chickens wander the surface and fish swim in the water;
land animals run away when you get close.

## Installing

```
pip install .
```

This pulls in `pygame`, which draws the window and reads the keyboard and
mouse.

## Playing

```
voxelworld
```

Pass `--seed N` to generate the same world every time:

```
voxelworld --seed 42
```

Controls:

| Key / button        | Action                                   |
|---------------------|------------------------------------------|
| A / D, arrows       | Walk left and right                      |
| W, Space, Up        | Jump (swim up in water)                  |
| S, Down             | Dive while in water                      |
| Left mouse button   | Hold to mine the block under the cursor  |
| Right mouse button  | Place the selected block                 |
| 1 - 9, mouse wheel  | Choose a hotbar slot                     |
| E                   | Open or close the extended inventory     |
| C                   | Open or close the crafting menu          |
| Esc                 | Quit                                     |

Blocks within reach of the player (100 pixels) are highlighted and named,
and hovering over an animal shows its name. Mining takes longer for harder
blocks; stone, coal and iron ore need at least a wooden pickaxe, and gold,
emerald and diamond ore at least an iron pickaxe, to break at normal speed.
Without the right tool they still break, only five times slower than by
hand. While the inventory or crafting menu is open the world is paused.

You start with dirt, stone, wood and sand in the hotbar, a wooden pickaxe,
and some coal, iron and gold ore in storage.

In the extended inventory, click one slot and then another to swap their
contents between the hotbar and the 27 storage slots. Clicking outside the
slots cancels the move.

## Crafting

| Tool            | Materials                |
|-----------------|--------------------------|
| Wooden Pickaxe  | 3 Wood                   |
| Stone Pickaxe   | 3 Stone + 2 Wood         |
| Iron Pickaxe    | 3 Iron Ore + 2 Wood      |
| Gold Pickaxe    | 3 Gold Ore + 2 Wood      |
| Diamond Pickaxe | 3 Diamond Ore + 2 Wood   |

Each pickaxe wears out after a fixed number of blocks (from 33 for gold to
1562 for diamond) and disappears when its durability reaches zero.

## Using it as a library

The simulation is separate from drawing, so it can be driven without a
window. Input for a frame is described by a `Controls` value, and all
randomness comes from a `random.Random` passed in:

```python
import random
from voxelworld.app import init_game, step_game
from voxelworld.model import Controls

rng = random.Random(1)
world = init_game(rng)
step_game(world, Controls(keys_down=frozenset({"d"})), 1 / 60, 0.0, rng)
print(world.player.x, world.player.y)
```

The modules:

- `voxelworld.model` – constants, the `BlockType`, `ToolType`,
  `AnimalType` and `AIState` enums, the `InventorySlot`, `Player`,
  `Animal`, `Camera`, `Controls` and `World` dataclasses, and
  `is_block_solid`, `block_color`, `block_name`.
- `voxelworld.worldgen` – `simple_noise`, `perlin_noise` and
  `generate_world`, which fills a world and returns the surface heights,
  plus the tree, lake and river helpers.
- `voxelworld.player` – `create_player`, `update_player`,
  `add_to_inventory`, `remove_from_inventory` and the input handlers for
  the hotbar, the inventory panel and mining/placing.
- `voxelworld.animals` – `init_animals`, `spawn_animal`, `update_animals`
  and the per-animal AI and physics steps.
- `voxelworld.crafting` – block hardness, tool speed, durability, break
  times, `can_craft_tool` and `handle_crafting`.
- `voxelworld.render` – drawing onto a `pygame.Surface`.
- `voxelworld.app` – `init_game`, `step_game`, `main` and
  `search_and_set_resource_dir`, which looks for a named directory in the
  working directory, then in the application directory and up to three
  levels above it, and changes into it when found.

## What it does not do

Worlds are not saved: each run starts from a freshly generated world, and
nothing is kept when the window closes. The player has a `health` value,
but nothing in the game changes it.

## Running the tests

```
pip install .[test]
pytest
```