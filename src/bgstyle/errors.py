# src/bgstyle/errors.py
from __future__ import annotations


class BgStyleError(Exception):
    """Base class for everything bgstyle raises on purpose."""


class ResolutionError(BgStyleError):
    """An asset reference could not be turned into a styled URL."""

    def __init__(self, message: str, *, entity_id: str | None = None) -> None:
        super().__init__(message)
        self.entity_id = entity_id


class UnknownStyle(ResolutionError, LookupError):
    def __init__(self, style_name: str, *, entity_id: str | None = None) -> None:
        super().__init__(f"Unknown image style: {style_name!r}", entity_id=entity_id)
        self.style_name = style_name


class MissingUnderlyingFile(ResolutionError, LookupError):
    def __init__(self, file_id: str, *, entity_id: str | None = None) -> None:
        super().__init__(
            f"Media {entity_id!r} references missing file {file_id!r}",
            entity_id=entity_id,
        )
        self.file_id = file_id


class UnresolvableAsset(ResolutionError):
    pass


class EmptySelector(BgStyleError, ValueError):
    """Raised instead of emitting a rule with no selector (it would apply globally)."""
