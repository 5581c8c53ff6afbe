# src/bgstyle/__init__.py
from __future__ import annotations

from .entities import (
    AssetReference,
    DirectFile,
    FieldDefinition,
    HeadTag,
    HostEntity,
    MediaWrapper,
    StyleFragment,
    StyleSpec,
)
from .errors import (
    BgStyleError,
    EmptySelector,
    MissingUnderlyingFile,
    ResolutionError,
    UnknownStyle,
    UnresolvableAsset,
)
from .fragments import StyleFragmentBuilder
from .pipeline import RenderOutput, RenderPipeline
from .resolver import AssetResolver
from .selectors import SelectorInterpolator
from .config import set_emission_mode

__all__ = [
    "AssetReference",
    "DirectFile",
    "FieldDefinition",
    "HeadTag",
    "HostEntity",
    "MediaWrapper",
    "StyleFragment",
    "StyleSpec",
    "BgStyleError",
    "EmptySelector",
    "MissingUnderlyingFile",
    "ResolutionError",
    "UnknownStyle",
    "UnresolvableAsset",
    "StyleFragmentBuilder",
    "RenderOutput",
    "RenderPipeline",
    "AssetResolver",
    "SelectorInterpolator",
    "set_emission_mode",
]
