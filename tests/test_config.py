from __future__ import annotations

import pytest

from bgstyle import config


def test_default_emission_mode_is_per_entity() -> None:
    assert config.get_emission_mode() == "per_entity"


@pytest.mark.parametrize("mode", ["per_entity", "combined"])
def test_set_emission_mode_valid_values(mode: str) -> None:
    config.set_emission_mode(mode)  # type: ignore[arg-type]
    assert config.get_emission_mode() == mode


def test_set_emission_mode_invalid_raises() -> None:
    with pytest.raises(ValueError):
        config.set_emission_mode("batched")  # type: ignore[arg-type]


def test_fragment_key_prefix_roundtrip() -> None:
    assert config.get_fragment_key_prefix() == "bgstyle"
    config.set_fragment_key_prefix("my-site_bg")
    assert config.get_fragment_key_prefix() == "my-site_bg"


@pytest.mark.parametrize("prefix", ["", "has space", "a/b"])
def test_fragment_key_prefix_invalid_raises(prefix: str) -> None:
    with pytest.raises(ValueError):
        config.set_fragment_key_prefix(prefix)
