#!/usr/bin/env python3
"""
RunConfig validation.
"""

import pytest

from bftape import ConfigError, RunConfig


def test_defaults():
    cfg = RunConfig()
    assert cfg.tape_size == 30000
    assert cfg.optimize is True
    assert cfg.step_limit is None
    assert cfg.debug is False


def test_zero_step_limit_is_unbounded():
    assert RunConfig(step_limit=0).step_limit is None


@pytest.mark.parametrize(
    "kwargs, option",
    [
        ({"tape_size": 0}, "tape_size"),
        ({"tape_size": -5}, "tape_size"),
        ({"tape_size": True}, "tape_size"),
        ({"tape_size": "100"}, "tape_size"),
        ({"step_limit": -1}, "step_limit"),
        ({"poll_interval": 0}, "poll_interval"),
    ],
)
def test_invalid_values(kwargs, option):
    with pytest.raises(ConfigError) as exc_info:
        RunConfig(**kwargs)
    assert exc_info.value.option == option
    assert isinstance(exc_info.value, ValueError)


def test_from_mapping():
    cfg = RunConfig.from_mapping({"tape_size": 100, "optimize": False})
    assert cfg == RunConfig(tape_size=100, optimize=False)


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ConfigError) as exc_info:
        RunConfig.from_mapping({"memory": 10})
    assert "memory" in str(exc_info.value)


def test_config_is_frozen():
    cfg = RunConfig()
    with pytest.raises(Exception):
        cfg.tape_size = 10
