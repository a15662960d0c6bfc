"""Animal spawning, behaviour and physics."""

from __future__ import annotations

import math
import random
from typing import NamedTuple

from .model import (
    BLOCK_SIZE,
    GRAY,
    MAX_ANIMALS,
    WHITE,
    WORLD_HEIGHT,
    WORLD_WIDTH,
    AIState,
    Animal,
    AnimalType,
    BlockType,
    Color,
    World,
    is_block_solid,
)

MAX_FALL_SPEED = 300.0
RESPAWN_LIMIT = 12
_LAND_SPAWN_COUNT = 8
_FISH_SPAWN_COUNT = 6

# Indexed by a random draw of 0 or 1.
_DIRECTIONS = (-1.0, 1.0)


class _Motion(NamedTuple):
    speed: float
    jump_force: float
    gravity: float


_MOTION = {
    AnimalType.RABBIT: _Motion(80.0, 300.0, 400.0),
    AnimalType.BIRD: _Motion(60.0, 150.0, 100.0),
    AnimalType.FISH: _Motion(40.0, 200.0, 0.0),
    AnimalType.PIG: _Motion(30.0, 180.0, 400.0),
    AnimalType.CHICKEN: _Motion(50.0, 250.0, 400.0),
}
_DEFAULT_MOTION = _Motion(50.0, 200.0, 400.0)

_COLORS = {
    AnimalType.RABBIT: Color(150, 111, 51),
    AnimalType.BIRD: Color(70, 130, 180),
    AnimalType.PIG: Color(255, 192, 203),
    AnimalType.CHICKEN: WHITE,
}
_FISH_COLORS = (Color(255, 140, 0), Color(255, 69, 0), Color(0, 191, 255))

_NAMES = {
    AnimalType.RABBIT: "Rabbit",
    AnimalType.BIRD: "Bird",
    AnimalType.FISH: "Fish",
    AnimalType.PIG: "Pig",
    AnimalType.CHICKEN: "Chicken",
}


def _cell(value: float) -> int:
    """Truncate to a whole pixel, then to a block index, both toward zero."""
    return int(int(value) / BLOCK_SIZE)


def _covered_cells(x: float, y: float, width: int, height: int):
    xs = range(_cell(x), _cell(x + width - 1) + 1)
    ys = range(_cell(y), _cell(y + height - 1) + 1)
    return ((bx, by) for bx in xs for by in ys)


def check_animal_collision(world: World, x: float, y: float, width: int, height: int) -> bool:
    """Whether a box overlaps a solid block or leaves the world."""
    return any(
        not world.in_bounds(bx, by) or is_block_solid(world.blocks[by][bx])
        for bx, by in _covered_cells(x, y, width, height)
    )


def is_animal_in_water(world: World, x: float, y: float, width: int, height: int) -> bool:
    """Whether any in-world block overlapped by a box is water."""
    return any(
        world.in_bounds(bx, by) and world.blocks[by][bx] == BlockType.WATER
        for bx, by in _covered_cells(x, y, width, height)
    )


def find_ground_height(world: World, x: int) -> int:
    """The pixel height at which an animal stands on a column's first solid block."""
    for y, row in enumerate(world.blocks):
        if row[x] not in (BlockType.AIR, BlockType.WATER):
            return y * BLOCK_SIZE - 16
    return (WORLD_HEIGHT - 1) * BLOCK_SIZE


def animal_size(animal_type: AnimalType) -> tuple[int, int]:
    """The (width, height) of an animal's body in pixels."""
    width = 8 if animal_type == AnimalType.BIRD else 12
    height = 6 if animal_type == AnimalType.FISH else 12
    return width, height


def _random_x(rng: random.Random) -> float:
    return float(rng.randint(50, (WORLD_WIDTH - 50) * BLOCK_SIZE))


def _try_spawn_fish(world: World, attempts: int, rng: random.Random) -> bool:
    for _ in range(attempts):
        x = _random_x(rng)
        y = float(rng.randint(40, 80) * BLOCK_SIZE)
        if is_animal_in_water(world, x, y, 12, 8):
            spawn_animal(world, AnimalType.FISH, x, y, rng)
            return True
    return False


def _spawn_on_ground(world: World, animal_type: AnimalType, rng: random.Random) -> None:
    x = _random_x(rng)
    y = float(find_ground_height(world, int(x / BLOCK_SIZE)))
    spawn_animal(world, animal_type, x, y, rng)


def init_animals(world: World, rng: random.Random) -> None:
    """Clear all animals, then scatter a few on the ground and some fish in water."""
    world.animal_count = 0
    for animal in world.animals:
        animal.alive = False

    for _ in range(_LAND_SPAWN_COUNT):
        animal_type = AnimalType(rng.randint(0, len(AnimalType) - 2))
        _spawn_on_ground(world, animal_type, rng)

    for _ in range(_FISH_SPAWN_COUNT):
        # An initial position is drawn and then discarded before the attempts.
        _random_x(rng)
        rng.randint(40, 80)
        _try_spawn_fish(world, 20, rng)


def spawn_animal(
    world: World, animal_type: AnimalType, x: float, y: float, rng: random.Random
) -> Animal | None:
    """Bring an animal to life in the first free slot; None if the world is full."""
    if world.animal_count >= MAX_ANIMALS:
        return None
    for animal in world.animals:
        if animal.alive:
            continue
        animal.type = animal_type
        animal.x = x
        animal.y = y
        animal.vel_x = 0.0
        animal.vel_y = 0.0
        animal.state = AIState.WANDER
        animal.state_timer = float(rng.randint(2, 8))
        animal.direction = _DIRECTIONS[rng.randint(0, 1)]
        animal.on_ground = False
        animal.in_water = False
        animal.alive = True
        animal.anim_time = 0.0
        world.animal_count += 1
        return animal
    return None


def update_animal_ai(world: World, animal: Animal, delta_time: float, rng: random.Random) -> None:
    """Advance an animal's behaviour state machine by one frame."""
    player = world.player
    player_dist = math.hypot(animal.x - player.x, animal.y - player.y)

    animal.state_timer -= delta_time
    animal.anim_time += delta_time

    if animal.state == AIState.WANDER:
        if player_dist < 80 and animal.type != AnimalType.FISH:
            animal.state = AIState.FLEE
            animal.state_timer = 3.0
            animal.direction = 1.0 if animal.x > player.x else -1.0
        elif animal.state_timer <= 0:
            animal.direction = _DIRECTIONS[rng.randint(0, 1)]
            animal.state_timer = float(rng.randint(2, 6))
    elif animal.state == AIState.FLEE:
        if player_dist > 120:
            animal.state = AIState.WANDER
            animal.state_timer = float(rng.randint(2, 8))
        elif animal.state_timer <= 0:
            animal.state = AIState.WANDER
            animal.state_timer = float(rng.randint(1, 3))
    elif animal.state == AIState.SWIM:
        if not animal.in_water:
            animal.state = AIState.WANDER
            animal.state_timer = float(rng.randint(2, 8))
        elif animal.state_timer <= 0:
            animal.direction = _DIRECTIONS[rng.randint(0, 1)]
            animal.state_timer = float(rng.randint(2, 5))


def _kill(world: World, animal: Animal) -> None:
    animal.alive = False
    world.animal_count -= 1


def update_animal_physics(
    world: World, animal: Animal, delta_time: float, rng: random.Random
) -> None:
    """Move an animal by one frame, resolving collisions and removing the lost."""
    motion = _MOTION.get(animal.type, _DEFAULT_MOTION)
    width, height = animal_size(animal.type)

    animal.in_water = is_animal_in_water(world, animal.x, animal.y, width, height)

    if animal.type == AnimalType.FISH:
        if not animal.in_water:
            _kill(world, animal)
            return
        animal.state = AIState.SWIM
        animal.vel_x = animal.direction * motion.speed
        if rng.randint(0, 100) < 5:
            animal.vel_y = float(rng.randint(-50, 50))
    else:
        if animal.state == AIState.FLEE or (
            animal.state == AIState.WANDER and rng.randint(0, 100) < 50
        ):
            animal.vel_x = animal.direction * motion.speed
        else:
            animal.vel_x *= 0.9

        if animal.type == AnimalType.BIRD and rng.randint(0, 100) < 10:
            animal.vel_y = -motion.jump_force
        elif (
            animal.on_ground
            and rng.randint(0, 100) < 5
            and animal.type == AnimalType.RABBIT
        ):
            animal.vel_y = -motion.jump_force

        if animal.in_water:
            animal.vel_y *= 0.8
            animal.vel_y += motion.gravity * delta_time * 0.3
        else:
            animal.vel_y += motion.gravity * delta_time

    animal.vel_y = max(-MAX_FALL_SPEED, min(MAX_FALL_SPEED, animal.vel_y))

    new_x = animal.x + animal.vel_x * delta_time
    new_y = animal.y + animal.vel_y * delta_time

    if check_animal_collision(world, new_x, animal.y, width, height):
        animal.vel_x = 0.0
        animal.direction *= -1
    else:
        animal.x = new_x

    if check_animal_collision(world, animal.x, new_y, width, height):
        if animal.vel_y > 0:
            animal.on_ground = True
        animal.vel_y = 0.0
    else:
        animal.y = new_y
        animal.on_ground = False

    if (
        animal.x < 0
        or animal.x > WORLD_WIDTH * BLOCK_SIZE
        or animal.y > WORLD_HEIGHT * BLOCK_SIZE
    ):
        _kill(world, animal)


def update_animals(world: World, delta_time: float, rng: random.Random) -> None:
    """Update every living animal and now and then spawn a new one."""
    for animal in world.animals:
        if animal.alive:
            update_animal_ai(world, animal, delta_time, rng)
            update_animal_physics(world, animal, delta_time, rng)

    if world.animal_count >= RESPAWN_LIMIT or rng.randint(0, 1000) >= 3:
        return

    animal_type = AnimalType(rng.randint(0, len(AnimalType) - 1))
    x = _random_x(rng)
    y = float(find_ground_height(world, int(x / BLOCK_SIZE)))

    if animal_type != AnimalType.FISH:
        spawn_animal(world, animal_type, x, y, rng)
        return

    if not _try_spawn_fish(world, 15, rng):
        fallback = AnimalType(rng.randint(0, len(AnimalType) - 2))
        _spawn_on_ground(world, fallback, rng)


def animal_color(animal_type: AnimalType, rng: random.Random) -> Color:
    """The colour an animal is drawn with; fish pick one of three at random."""
    if animal_type == AnimalType.FISH:
        return _FISH_COLORS[rng.randint(0, 2)]
    return _COLORS.get(animal_type, GRAY)


def animal_name(animal_type: AnimalType) -> str:
    """The display name of an animal."""
    return _NAMES.get(animal_type, "Unknown")