# src/bgstyle/schemas.py
"""Request/response models for the HTTP preview."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from .entities import AssetReference, DirectFile, HostEntity, MediaWrapper


class FileItem(BaseModel):
    type: Literal["file"] = "file"
    id: str
    uri: str


class MediaItem(BaseModel):
    type: Literal["media"] = "media"
    id: str
    source_plugin: str = "image"
    source_file_id: Optional[str] = None
    bundle: str = ""


class HostPayload(BaseModel):
    entity_type: str
    id: str
    values: dict[str, Any] = Field(default_factory=dict)


class FormatterSettings(BaseModel):
    selector: Optional[str] = None
    image_style: Optional[str] = None


class RenderRequest(BaseModel):
    variant: str = "bgstyle_file"
    items: list[FileItem | MediaItem] = Field(default_factory=list)
    # files the media items point at, by id
    files: list[FileItem] = Field(default_factory=list)
    settings: FormatterSettings = Field(default_factory=FormatterSettings)
    host: Optional[HostPayload] = None
    mode: Optional[Literal["per_entity", "combined"]] = None

    def references(self) -> list[AssetReference]:
        return [to_reference(i) for i in self.items]

    def direct_files(self) -> list[DirectFile]:
        return [DirectFile(id=f.id, uri=f.uri) for f in self.files]

    def host_entity(self) -> HostEntity | None:
        if self.host is None:
            return None
        return HostEntity(
            entity_type=self.host.entity_type, id=self.host.id, values=self.host.values
        )


class FragmentOut(BaseModel):
    key: str
    css: str
    source_ids: list[str] = Field(default_factory=list)


class RenderResponse(BaseModel):
    variant: str
    fragments: list[FragmentOut]
    head_html: str
    summary: list[str]


def to_reference(item: FileItem | MediaItem) -> AssetReference:
    if isinstance(item, FileItem):
        return DirectFile(id=item.id, uri=item.uri)
    return MediaWrapper(
        id=item.id,
        source_plugin=item.source_plugin,
        source_file_id=item.source_file_id,
        bundle=item.bundle,
    )
