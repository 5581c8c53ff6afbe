# src/bgstyle/selectors.py
from __future__ import annotations

from typing import Any, Mapping

from .collaborators import TokenResolver


class SelectorInterpolator:
    def __init__(self, tokens: TokenResolver | None = None) -> None:
        # None means the host has no token support; templates pass through.
        self._tokens = tokens

    @property
    def token_support(self) -> bool:
        return self._tokens is not None

    def interpolate(self, template: str, context: Mapping[str, Any] | None) -> str:
        if not context or self._tokens is None:
            return template
        return self._tokens.replace(template, context)
