import pytest

from raider.config import DEFAULT_CONFIG, GameConfig
from raider.controls import InputState
from raider.utils import clamp, rects_overlap
from raider.entities import Bullet


def test_press_and_release():
    keys = InputState()
    keys.press("up")
    keys.press("fire")
    assert keys.up and keys.fire
    assert not (keys.down or keys.left or keys.right)

    keys.release("up")
    assert not keys.up and keys.fire

    keys.release_all()
    assert keys == InputState()


def test_unknown_control():
    with pytest.raises(KeyError):
        InputState().press("jump")


@pytest.mark.parametrize("action,expected", [
    ([0, 0, 0], InputState()),
    ([1, 0, 1], InputState(up=True, fire=True)),
    ([2, 2, 0], InputState(down=True, right=True)),
    ([0, 1, 0], InputState(left=True)),
])
def test_from_action(action, expected):
    assert InputState.from_action(action) == expected


def test_default_config():
    cfg = DEFAULT_CONFIG
    assert (cfg.width, cfg.height) == (320, 240)
    assert cfg.spawn_interval_ms == 1500
    assert cfg.fire_cooldown_ms == 250
    assert (cfg.bullet_damage, cfg.collision_damage, cfg.max_health) == (10, 20, 100)


@pytest.mark.parametrize("field", ["width", "height", "spawn_interval_ms", "bullet_damage"])
def test_config_rejects_non_positive(field):
    with pytest.raises(ValueError):
        GameConfig(**{field: 0})


def test_config_rejects_negative_stars():
    with pytest.raises(ValueError):
        GameConfig(num_stars=-1)


def test_config_from_dict():
    cfg = GameConfig.from_dict({"width": 640, "num_stars": 0})
    assert cfg.width == 640
    assert cfg.height == 240
    assert GameConfig.from_dict(cfg.to_dict()) == cfg


def test_config_from_dict_unknown_key():
    with pytest.raises(ValueError, match="gravity"):
        GameConfig.from_dict({"gravity": 9.8})


def test_clamp():
    assert clamp(5, 10, 20) == 10
    assert clamp(25, 10, 20) == 20
    assert clamp(15, 10, 20) == 15


def test_touching_boxes_do_not_overlap():
    a = Bullet(0, 0, 10, 10, 0, "#000000")
    b = Bullet(10, 0, 10, 10, 0, "#000000")
    c = Bullet(9, 9, 10, 10, 0, "#000000")
    assert not rects_overlap(a, b)
    assert rects_overlap(a, c)


def test_setup_logging_sets_root_level():
    import logging

    from raider.utils import setup_logging

    root = logging.getLogger()
    previous = root.level
    try:
        assert setup_logging("debug") is None
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)
