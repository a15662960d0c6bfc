import random

import pytest

from voxelworld.animals import (
    animal_color,
    animal_name,
    animal_size,
    check_animal_collision,
    find_ground_height,
    init_animals,
    is_animal_in_water,
    spawn_animal,
    update_animal_ai,
    update_animal_physics,
    update_animals,
)
from voxelworld.model import (
    BLOCK_SIZE,
    MAX_ANIMALS,
    WORLD_HEIGHT,
    WORLD_WIDTH,
    AIState,
    Animal,
    AnimalType,
    BlockType,
    Color,
    World,
)


def _world_with_floor(row: int) -> World:
    world = World()
    for x in range(WORLD_WIDTH):
        world.blocks[row][x] = BlockType.STONE
    return world


def _world_with_water(top: int, bottom: int) -> World:
    world = World()
    for y in range(top, bottom + 1):
        for x in range(WORLD_WIDTH):
            world.blocks[y][x] = BlockType.WATER
    return world


def test_collision_empty_world():
    assert check_animal_collision(World(), 100.0, 100.0, 12, 12) is False


def test_collision_with_solid_block():
    world = World()
    world.blocks[3][3] = BlockType.STONE
    assert check_animal_collision(world, 3 * BLOCK_SIZE + 5, 3 * BLOCK_SIZE + 5, 12, 12)


def test_collision_outside_world():
    world = World()
    assert check_animal_collision(world, -40.0, 100.0, 12, 12)
    assert check_animal_collision(world, WORLD_WIDTH * BLOCK_SIZE + 1.0, 100.0, 12, 12)


def test_water_is_not_solid_but_detected():
    world = World()
    world.blocks[5][5] = BlockType.WATER
    x, y = 5 * BLOCK_SIZE + 2, 5 * BLOCK_SIZE + 2
    assert check_animal_collision(world, x, y, 12, 12) is False
    assert is_animal_in_water(world, x, y, 12, 12) is True
    assert is_animal_in_water(world, 0.0, 0.0, 12, 12) is False
    assert is_animal_in_water(world, -500.0, -500.0, 12, 12) is False


def test_ground_height_rests_animal_on_block():
    world = World()
    world.blocks[10][4] = BlockType.STONE
    world.blocks[5][4] = BlockType.WATER
    ground = find_ground_height(world, 4)
    x = 4 * BLOCK_SIZE
    assert not check_animal_collision(world, x, ground, 12, 12)
    assert check_animal_collision(world, x, ground + 16, 12, 12)


def test_ground_height_empty_column():
    assert find_ground_height(World(), 7) == (WORLD_HEIGHT - 1) * BLOCK_SIZE


@pytest.mark.parametrize(
    "animal_type,size",
    [
        (AnimalType.BIRD, (8, 12)),
        (AnimalType.FISH, (12, 6)),
        (AnimalType.PIG, (12, 12)),
        (AnimalType.RABBIT, (12, 12)),
    ],
)
def test_animal_size(animal_type, size):
    assert animal_size(animal_type) == size


def test_spawn_animal_fills_first_free_slot():
    world = World()
    rng = random.Random(0)
    first = spawn_animal(world, AnimalType.PIG, 10.0, 20.0, rng)
    second = spawn_animal(world, AnimalType.BIRD, 30.0, 40.0, rng)
    assert world.animal_count == 2
    assert first is world.animals[0]
    assert second is world.animals[1]
    assert first.alive and first.type == AnimalType.PIG
    assert (first.x, first.y) == (10.0, 20.0)
    assert first.state == AIState.WANDER
    assert 2 <= first.state_timer <= 8
    assert first.direction in (1.0, -1.0)


def test_spawn_animal_refuses_when_full():
    world = World()
    world.animal_count = MAX_ANIMALS
    assert spawn_animal(world, AnimalType.PIG, 0.0, 0.0, random.Random(0)) is None
    assert not any(animal.alive for animal in world.animals)


def test_init_animals_without_water():
    world = World()
    init_animals(world, random.Random(1))
    alive = [animal for animal in world.animals if animal.alive]
    assert world.animal_count == 8
    assert len(alive) == 8
    assert all(animal.type != AnimalType.CHICKEN for animal in alive)


def test_init_animals_with_water_adds_fish():
    world = _world_with_water(30, 90)
    init_animals(world, random.Random(2))
    alive = [animal for animal in world.animals if animal.alive]
    assert world.animal_count == len(alive) == 14
    assert sum(animal.type == AnimalType.FISH for animal in alive) >= 6


def test_ai_flees_from_near_player():
    world = World()
    world.player.x, world.player.y = 100, 100
    animal = Animal(type=AnimalType.RABBIT, x=150.0, y=100.0, alive=True, state_timer=5.0)
    update_animal_ai(world, animal, 0.1, random.Random(0))
    assert animal.state == AIState.FLEE
    assert animal.state_timer == 3.0
    assert animal.direction == 1.0


def test_fish_does_not_flee():
    world = World()
    world.player.x, world.player.y = 100, 100
    animal = Animal(type=AnimalType.FISH, x=90.0, y=100.0, alive=True, state_timer=5.0)
    update_animal_ai(world, animal, 0.1, random.Random(0))
    assert animal.state == AIState.WANDER


def test_flee_ends_when_player_far():
    world = World()
    animal = Animal(
        type=AnimalType.PIG, x=1000.0, y=1000.0, alive=True, state=AIState.FLEE, state_timer=2.0
    )
    update_animal_ai(world, animal, 0.1, random.Random(0))
    assert animal.state == AIState.WANDER
    assert 2 <= animal.state_timer <= 8


def test_swim_ends_out_of_water():
    world = World()
    animal = Animal(
        type=AnimalType.FISH, x=1000.0, y=1000.0, alive=True, state=AIState.SWIM, state_timer=2.0
    )
    update_animal_ai(world, animal, 0.1, random.Random(0))
    assert animal.state == AIState.WANDER


def test_fish_out_of_water_dies():
    world = World()
    animal = spawn_animal(world, AnimalType.FISH, 500.0, 500.0, random.Random(0))
    update_animal_physics(world, animal, 0.1, random.Random(0))
    assert animal.alive is False
    assert world.animal_count == 0


def test_fish_in_water_swims():
    world = _world_with_water(10, 30)
    animal = spawn_animal(world, AnimalType.FISH, 500.0, 500.0, random.Random(0))
    update_animal_physics(world, animal, 0.1, random.Random(0))
    assert animal.alive is True
    assert animal.state == AIState.SWIM
    assert animal.in_water is True


def test_animal_falls_under_gravity():
    world = World()
    animal = spawn_animal(world, AnimalType.PIG, 500.0, 100.0, random.Random(0))
    update_animal_physics(world, animal, 0.1, random.Random(0))
    assert animal.y > 100.0
    assert animal.vel_y > 0


def test_fall_speed_is_capped():
    world = World()
    animal = spawn_animal(world, AnimalType.PIG, 500.0, 100.0, random.Random(0))
    animal.vel_y = 5000.0
    update_animal_physics(world, animal, 0.01, random.Random(0))
    assert animal.vel_y == 300.0


def test_animal_lands_on_floor():
    world = _world_with_floor(20)
    rng = random.Random(4)
    animal = spawn_animal(world, AnimalType.PIG, 3200.0, 560.0, rng)
    for _ in range(100):
        update_animal_physics(world, animal, 0.05, rng)
    assert animal.alive
    assert animal.on_ground is True
    assert animal.y + 12 <= 20 * BLOCK_SIZE
    assert not check_animal_collision(world, animal.x, animal.y, 12, 12)


def test_animal_outside_world_is_removed():
    world = World()
    animal = spawn_animal(world, AnimalType.PIG, 0.0, 100.0, random.Random(0))
    animal.x = WORLD_WIDTH * BLOCK_SIZE + 100.0
    update_animal_physics(world, animal, 0.05, random.Random(0))
    assert animal.alive is False
    assert world.animal_count == 0


def test_update_animals_keeps_count_consistent():
    world = _world_with_floor(60)
    rng = random.Random(11)
    init_animals(world, rng)
    for _ in range(300):
        update_animals(world, 1 / 60, rng)
        assert world.animal_count == sum(animal.alive for animal in world.animals)
        assert world.animal_count <= MAX_ANIMALS


def test_animal_colors():
    rng = random.Random(0)
    assert animal_color(AnimalType.RABBIT, rng) == Color(150, 111, 51, 255)
    assert animal_color(AnimalType.PIG, rng) == Color(255, 192, 203, 255)
    fish = {animal_color(AnimalType.FISH, rng) for _ in range(50)}
    assert fish <= {Color(255, 140, 0), Color(255, 69, 0), Color(0, 191, 255)}


@pytest.mark.parametrize(
    "animal_type,name",
    [
        (AnimalType.RABBIT, "Rabbit"),
        (AnimalType.BIRD, "Bird"),
        (AnimalType.FISH, "Fish"),
        (AnimalType.PIG, "Pig"),
        (AnimalType.CHICKEN, "Chicken"),
    ],
)
def test_animal_names(animal_type, name):
    assert animal_name(animal_type) == name