# src/bgstyle/entities.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Union

EntityType = Literal["file", "media"]


@dataclass(frozen=True, slots=True)
class DirectFile:
    id: str
    uri: str

    @property
    def entity_type(self) -> EntityType:
        return "file"


@dataclass(frozen=True, slots=True)
class MediaWrapper:
    id: str
    source_plugin: str
    # value of the media source field; None when the source has no local file
    source_file_id: str | None = None
    bundle: str = ""

    @property
    def entity_type(self) -> EntityType:
        return "media"


AssetReference = Union[DirectFile, MediaWrapper]


@dataclass(frozen=True, slots=True)
class HostEntity:
    """The entity a field is attached to (e.g. a node), used for tokens."""

    entity_type: str
    id: str
    values: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    field_type: str
    target_type: str | None = None


@dataclass(frozen=True, slots=True)
class StyleSpec:
    selector_template: str = ""
    style_name: str = ""


@dataclass(frozen=True, slots=True)
class HeadTag:
    value: str
    tag: str = "style"


@dataclass(frozen=True, slots=True)
class StyleFragment:
    css_text: str
    fragment_key: str
    source_ids: tuple[str, ...] = ()

    def head_tag(self) -> HeadTag:
        return HeadTag(value=self.css_text)

    def as_attachment(self) -> tuple[HeadTag, str]:
        """Pair handed to the page head: (style tag, unique key)."""
        return self.head_tag(), self.fragment_key
