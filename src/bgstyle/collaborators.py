# src/bgstyle/collaborators.py
from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol

from .entities import DirectFile


class TransformHandle(Protocol):
    name: str
    label: str

    def build_url(self, source_uri: str) -> str: ...


class StyleRegistry(Protocol):
    def lookup_style(self, name: str) -> TransformHandle | None: ...
    def list_styles(self) -> Iterable[TransformHandle]: ...


class FileStorage(Protocol):
    def load_file(self, file_id: str) -> DirectFile | None: ...


class TokenResolver(Protocol):
    def replace(self, template: str, context: Mapping[str, Any]) -> str: ...


class UrlRelativizer(Protocol):
    def to_relative(self, url: str) -> str: ...
