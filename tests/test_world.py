import json

import pytest

from chase.config import TILE_FLOOR, TILE_WALL
from chase.world import World


def test_world_custom_map_grid():
    grid = [[0, 1], [-1, 0]]
    w = World(map_grid=grid)
    assert w.map == grid
    assert w.width == 2 and w.height == 2
    assert w.avatar_spawn is None and w.wizard_spawn is None
    assert w.treasure == []
    assert w.stairs is None
    assert w.floor_layer().cells == {(0, 0), (1, 0), (1, 1)}
    assert w.wall_layer().cells == {(1, 0)}


def test_world_default_json_loading():
    w = World()
    assert w.width == 16 and w.height == 11
    assert w.tiles[0][0] == TILE_WALL
    assert w.tiles[1][1] == TILE_FLOOR
    assert w.avatar_spawn == (1.5, 1.5)
    assert w.wizard_spawn == (14.5, 9.5)
    assert w.stairs == (9.5, 8.5)
    assert len(w.treasure) == 4
    assert w.treasure_value == 100


def test_default_world_points_lie_on_walkable_nodes():
    w = World()
    grid = w.build_grid()
    for point in [w.avatar_spawn, w.wizard_spawn, w.stairs] + w.treasure:
        node = grid.world_to_node(point)
        assert node is not None and node.walkable, point


def test_default_world_void_has_no_nodes():
    grid = World().build_grid()
    assert grid.world_to_node((10.5, 3.5)) is None


def test_world_loads_custom_file(tmp_path):
    path = tmp_path / "level.json"
    path.write_text(
        json.dumps(
            {
                "map": [[0, 0, 1]],
                "cell_size": 2.0,
                "offset": [1.0, -1.0],
                "avatar": [1.5, 0.0],
                "treasure": [[3.0, 0.0], "bad"],
            }
        )
    )
    w = World(path=str(path))
    assert w.cell_size == 2.0
    assert w.offset == (1.0, -1.0)
    assert w.treasure == [(3.0, 0.0)]
    grid = w.build_grid()
    assert grid.node_at(1, 0).world_position == (3.0, -1.0, 0.0)
    assert not grid.node_at(2, 0).walkable


def test_world_missing_file_raises(tmp_path):
    with pytest.raises(RuntimeError, match="Failed to load world map"):
        World(path=str(tmp_path / "missing.json"))


def test_world_ragged_rows_raise():
    with pytest.raises(RuntimeError):
        World(map_grid=[[0, 0], [0]])
