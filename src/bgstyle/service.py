# src/bgstyle/service.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .entities import DirectFile
from .fragments import StyleFragmentBuilder
from .memory import (
    BracketTokenResolver,
    InMemoryFileStorage,
    InMemoryStyleRegistry,
    PublicFilesUrls,
)
from .pipeline import RenderPipeline, ResponsiveHook
from .resolver import AssetResolver
from .selectors import SelectorInterpolator
from .site_config import SiteSettings


@dataclass(slots=True)
class BackgroundService:
    """
    A pipeline wired to the in-memory host adapters.

    Building one never changes bgstyle.config; hosts call
    apply_site_settings() once at startup for that.

    Used by the CLI and the HTTP preview; a real host builds RenderPipeline
    with its own storage, token and URL services instead.
    """

    settings: SiteSettings
    styles: InMemoryStyleRegistry
    files: InMemoryFileStorage
    pipeline: RenderPipeline

    @classmethod
    def from_settings(
        cls,
        settings: SiteSettings,
        *,
        files: Iterable[DirectFile] = (),
        token_support: bool = True,
        responsive_hook: ResponsiveHook | None = None,
    ) -> BackgroundService:
        styles = InMemoryStyleRegistry.from_labels(settings.image_styles)
        storage = InMemoryFileStorage(files)
        pipeline = RenderPipeline(
            resolver=AssetResolver(styles=styles, files=storage),
            interpolator=SelectorInterpolator(
                BracketTokenResolver() if token_support else None
            ),
            builder=StyleFragmentBuilder(
                PublicFilesUrls(
                    base_url=settings.base_url,
                    public_path=settings.public_path,
                    private_path=settings.private_path,
                )
            ),
            responsive_hook=responsive_hook,
        )
        return cls(settings=settings, styles=styles, files=storage, pipeline=pipeline)
