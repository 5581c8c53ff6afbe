# src/bgstyle/memory.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping
from urllib.parse import urlsplit

from .entities import DirectFile, HostEntity

DEFAULT_BASE_URL = "http://localhost"
DEFAULT_PUBLIC_PATH = "/sites/default/files"
DEFAULT_PRIVATE_PATH = "/system/files"


# ---- Image styles ----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ImageStyle:
    name: str
    label: str

    def build_url(self, source_uri: str) -> str:
        """
        Derivative location: public://a.png -> public://styles/<name>/a.png.
        """
        if "://" in source_uri:
            scheme, target = source_uri.split("://", 1)
            return f"{scheme}://styles/{self.name}/{target.lstrip('/')}"
        return f"styles/{self.name}/{source_uri.lstrip('/')}"


class InMemoryStyleRegistry:
    def __init__(self, styles: Iterable[ImageStyle] = ()) -> None:
        self._styles: dict[str, ImageStyle] = {}
        for s in styles:
            self.add(s)

    @classmethod
    def from_labels(cls, labels: Mapping[str, str]) -> InMemoryStyleRegistry:
        return cls(ImageStyle(name=k, label=v) for k, v in labels.items())

    def add(self, style: ImageStyle) -> None:
        self._styles[style.name] = style

    def lookup_style(self, name: str) -> ImageStyle | None:
        return self._styles.get(name)

    def list_styles(self) -> list[ImageStyle]:
        return list(self._styles.values())


# ---- Files -----------------------------------------------------------------------


class InMemoryFileStorage:
    def __init__(self, files: Iterable[DirectFile] = ()) -> None:
        self._files: dict[str, DirectFile] = {f.id: f for f in files}

    def add(self, file: DirectFile) -> None:
        self._files[file.id] = file

    def load_file(self, file_id: str) -> DirectFile | None:
        return self._files.get(str(file_id))


# ---- Tokens ----------------------------------------------------------------------

_TOKEN_RE = re.compile(r"\[([A-Za-z0-9_\-]+):([^\[\]\s]+)\]")
_MISSING = object()


class BracketTokenResolver:
    """
    Replace `[type:property]` tokens (and `[type:a:b]` chains).

    The type must be a key of the context. Tokens that cannot be resolved are
    left as they are. Replacement is one pass over the template, so values
    that look like tokens are not expanded again.
    """

    def replace(self, template: str, context: Mapping[str, Any]) -> str:
        def _sub(m: re.Match[str]) -> str:
            kind, path = m.group(1), m.group(2)
            if kind not in context:
                return m.group(0)
            value: Any = context[kind]
            for part in path.split(":"):
                value = _lookup(value, part)
                if value is _MISSING or value is None:
                    return m.group(0)
            return str(value)

        return _TOKEN_RE.sub(_sub, template)


def _lookup(obj: Any, name: str) -> Any:
    if isinstance(obj, HostEntity):
        if name in obj.values:
            return obj.values[name]
        return getattr(obj, name, _MISSING) if name in ("id", "entity_type") else _MISSING
    if isinstance(obj, Mapping):
        return obj.get(name, _MISSING)
    if name.startswith("_"):
        return _MISSING
    return getattr(obj, name, _MISSING)


# ---- URLs ------------------------------------------------------------------------


class PublicFilesUrls:
    """
    Turn stream URIs and same-origin absolute URLs into root-relative paths.

    public:// and private:// map to their served paths; any other stream
    scheme (e.g. temporary://) has no web path and is returned unchanged.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        public_path: str = DEFAULT_PUBLIC_PATH,
        private_path: str = DEFAULT_PRIVATE_PATH,
    ) -> None:
        parts = urlsplit(base_url)
        self._origin = (parts.scheme.lower(), parts.netloc.lower())
        self._streams = {
            "public://": "/" + public_path.strip("/"),
            "private://": "/" + private_path.strip("/"),
        }

    def to_relative(self, url: str) -> str:
        for prefix, path in self._streams.items():
            if url.startswith(prefix):
                return f"{path}/{url[len(prefix):].lstrip('/')}"

        parts = urlsplit(url)
        if (parts.scheme.lower(), parts.netloc.lower()) != self._origin:
            return url

        out = parts.path or "/"
        if parts.query:
            out += f"?{parts.query}"
        if parts.fragment:
            out += f"#{parts.fragment}"
        return out
