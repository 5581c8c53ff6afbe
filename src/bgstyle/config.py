# src/bgstyle/config.py
from __future__ import annotations

import re
from typing import Literal

EmissionMode = Literal["per_entity", "combined"]

EMISSION_MODE: EmissionMode = "per_entity"
FRAGMENT_KEY_PREFIX: str = "bgstyle"

_PREFIX_RE = re.compile(r"^[A-Za-z0-9_\-]+$")


def get_emission_mode() -> EmissionMode:
    return EMISSION_MODE


def set_emission_mode(mode: EmissionMode) -> None:
    """
    Set how a field's images become style fragments.

    - "per_entity": one fragment (one CSS rule) per image.
    - "combined": a single fragment per field, all images stacked as layers.
    """
    global EMISSION_MODE
    if mode not in ("per_entity", "combined"):
        raise ValueError("emission_mode must be 'per_entity' or 'combined'")
    EMISSION_MODE = mode


def get_fragment_key_prefix() -> str:
    return FRAGMENT_KEY_PREFIX


def set_fragment_key_prefix(prefix: str) -> None:
    global FRAGMENT_KEY_PREFIX
    if not prefix or not _PREFIX_RE.match(prefix):
        raise ValueError("fragment key prefix must be non-empty [A-Za-z0-9_-]")
    FRAGMENT_KEY_PREFIX = prefix
