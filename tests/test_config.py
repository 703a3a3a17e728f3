import math

from chase import config


def test_fixed_step_is_fifty_hertz():
    assert math.isclose(config.FIXED_DT, 0.02, rel_tol=1e-9)


def test_world_file_extension():
    # World file should be a JSON definition
    assert config.WORLD_FILE.endswith(".json")


def test_taunt_windows_are_ordered():
    for low, high in (config.FIRST_TAUNT_WINDOW, config.TAUNT_WINDOW):
        assert 0 < low < high
