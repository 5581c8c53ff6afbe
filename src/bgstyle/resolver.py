# src/bgstyle/resolver.py
from __future__ import annotations

from .collaborators import FileStorage, StyleRegistry
from .entities import AssetReference, DirectFile, MediaWrapper
from .errors import MissingUnderlyingFile, UnknownStyle, UnresolvableAsset


class AssetResolver:
    """
    Turn a file or media reference plus an image style name into the URL of
    the styled derivative.

    Nothing is cached: every call goes back to the storage and the registry.
    """

    def __init__(self, *, styles: StyleRegistry, files: FileStorage) -> None:
        self._styles = styles
        self._files = files

    def resolve(self, ref: AssetReference, style_name: str) -> str:
        source = self.source_file(ref)
        return self._apply_style(source.uri, style_name, entity_id=ref.id)

    def source_file(self, ref: AssetReference) -> DirectFile:
        if isinstance(ref, DirectFile):
            return ref
        if isinstance(ref, MediaWrapper):
            fid = ref.source_file_id
            if fid is None or fid == "":
                raise UnresolvableAsset(
                    f"Media {ref.id!r} (source {ref.source_plugin!r}) has no source file",
                    entity_id=ref.id,
                )
            file = self._files.load_file(fid)
            if file is None:
                raise MissingUnderlyingFile(fid, entity_id=ref.id)
            return file
        raise UnresolvableAsset(
            f"Unsupported asset reference: {type(ref).__name__}",
            entity_id=getattr(ref, "id", None),
        )

    def _apply_style(self, uri: str, style_name: str, *, entity_id: str) -> str:
        handle = self._styles.lookup_style(style_name) if style_name else None
        if handle is None:
            raise UnknownStyle(style_name, entity_id=entity_id)
        return handle.build_url(uri)
