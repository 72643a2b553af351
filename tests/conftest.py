"""Shared fixtures for Qube tests."""

import dataclasses
import textwrap

import pytest

from qube.config import Config
from qube.scanning.context import ScanContext


def pytest_configure(config):
    """Register the slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


@pytest.fixture
def default_config():
    """Built-in defaults."""
    return Config.default()


@pytest.fixture
def quiet_config():
    """Every check disabled; tests switch on only what they look at."""
    toggles = {f.name: False for f in dataclasses.fields(Config) if f.name.startswith("check_")}
    return Config(**toggles)


@pytest.fixture
def make_context():
    """Build a ScanContext from dedented GDScript source."""

    def _make(source, config=None, path="res://player.gd"):
        text = textwrap.dedent(source).lstrip("\n")
        return ScanContext.from_source(text, path, config or Config.default())

    return _make


@pytest.fixture
def player_script():
    """A small but realistic GDScript file."""
    return textwrap.dedent(
        """\
        extends CharacterBody2D
        class_name Player

        signal health_changed(value)
        signal died

        const MAX_SPEED := 300.0
        const Bullet = preload("res://scenes/bullet.tscn")

        @export var jump_height: float = 64.0
        @onready var sprite = $Sprite2D

        var health: int = 3


        func _ready() -> void:
        \tpass


        func take_damage(amount: int) -> void:
        \thealth -= amount
        \tif health <= 0 and not is_queued_for_deletion():
        \t\tdied.emit()
        \telse:
        \t\thealth_changed.emit(health)


        func shoot(direction):
        \tvar bullet := Bullet.instantiate()
        \tbullet.speed = 750
        \tprint("shoot ", direction)
        """
    )
