"""Game setup, the per-frame update and the interactive window loop."""

from __future__ import annotations

import argparse
import os
import random
import sys
from pathlib import Path

from .animals import init_animals, update_animals
from .crafting import handle_crafting
from .model import SCREEN_HEIGHT, SCREEN_WIDTH, SKYBLUE, Controls, World
from .player import (
    create_player,
    handle_block_interaction,
    handle_extended_inventory,
    handle_inventory_input,
    update_player,
)
from .worldgen import generate_world

WINDOW_TITLE = "2D Voxel World - Enhanced"
TARGET_FPS = 60
_SEARCH_PREFIXES = ("", "..", os.path.join("..", ".."), os.path.join("..", "..", ".."))


def init_game(rng: random.Random | None = None) -> World:
    """Create a world with a fresh player, generated terrain and animals."""
    rng = rng if rng is not None else random.Random()
    world = World(player=create_player())
    world.camera.target_x = float(world.player.x)
    world.camera.target_y = float(world.player.y)
    world.camera.offset_x = SCREEN_WIDTH / 2.0
    world.camera.offset_y = SCREEN_HEIGHT / 2.0
    world.camera.rotation = 0.0
    world.camera.zoom = 1.0
    generate_world(world, rng)
    init_animals(world, rng)
    return world


def search_and_set_resource_dir(folder_name: str, app_dir: str | os.PathLike | None = None) -> bool:
    """Find a resource directory and make it the working directory.

    The working directory is tried first, then the application directory and
    up to three levels above it. Returns False, leaving the working directory
    unchanged, when no such directory exists.
    """
    if Path(folder_name).is_dir():
        os.chdir(Path.cwd() / folder_name)
        return True

    if app_dir is None:
        app_dir = Path(sys.argv[0]).resolve().parent if sys.argv and sys.argv[0] else Path.cwd()

    for prefix in _SEARCH_PREFIXES:
        candidate = Path(app_dir) / prefix / folder_name if prefix else Path(app_dir) / folder_name
        if candidate.is_dir():
            os.chdir(candidate)
            return True
    return False


def step_game(
    world: World, controls: Controls, delta_time: float, now: float, rng: random.Random
) -> None:
    """Apply one frame of input and, unless a menu is open, advance the simulation."""
    player = world.player
    handle_inventory_input(player, controls)
    handle_extended_inventory(player, controls)
    handle_crafting(player, controls)

    if not player.inventory_open and not player.crafting_open:
        update_player(world, controls, delta_time, now)
        update_animals(world, delta_time, rng)
        handle_block_interaction(world, controls, now)


def _held_key_names(pygame) -> frozenset[str]:
    tracked = {
        "a": pygame.K_a,
        "d": pygame.K_d,
        "w": pygame.K_w,
        "s": pygame.K_s,
        "left": pygame.K_LEFT,
        "right": pygame.K_RIGHT,
        "up": pygame.K_UP,
        "down": pygame.K_DOWN,
        "space": pygame.K_SPACE,
    }
    pressed = pygame.key.get_pressed()
    return frozenset(name for name, key in tracked.items() if pressed[key])


def main(argv: list[str] | None = None) -> int:
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="voxelworld", description="A 2D voxel sandbox.")
    parser.add_argument("--seed", type=int, default=None, help="seed for world generation")
    args = parser.parse_args(argv)

    import pygame

    from .render import draw_animals, draw_player, draw_ui, draw_world

    rng = random.Random(args.seed)
    pygame.init()
    try:
        surface = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        world = init_game(rng)

        running = True
        while running:
            delta_time = clock.tick(TARGET_FPS) / 1000.0
            now = pygame.time.get_ticks() / 1000.0

            keys_pressed: set[str] = set()
            left_pressed = right_pressed = False
            wheel = 0.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    keys_pressed.add(pygame.key.name(event.key))
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    if event.button == 1:
                        left_pressed = True
                    elif event.button == 3:
                        right_pressed = True
                elif event.type == pygame.MOUSEWHEEL:
                    wheel += event.y
            if not running:
                break

            mouse = tuple(float(v) for v in pygame.mouse.get_pos())
            controls = Controls(
                keys_down=_held_key_names(pygame),
                keys_pressed=frozenset(keys_pressed),
                mouse=mouse,
                left_down=bool(pygame.mouse.get_pressed()[0]),
                left_pressed=left_pressed,
                right_pressed=right_pressed,
                wheel=wheel,
            )
            step_game(world, controls, delta_time, now, rng)

            surface.fill(tuple(SKYBLUE[:3]))
            draw_world(surface, world)
            draw_animals(surface, world, rng)
            draw_player(surface, world, now, rng)
            draw_ui(surface, world, mouse, rng)
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())