from __future__ import annotations

import pytest

from bgstyle import config, variants
from bgstyle.entities import DirectFile
from bgstyle.fragments import StyleFragmentBuilder
from bgstyle.memory import (
    BracketTokenResolver,
    ImageStyle,
    InMemoryFileStorage,
    InMemoryStyleRegistry,
    PublicFilesUrls,
)
from bgstyle.pipeline import RenderPipeline
from bgstyle.resolver import AssetResolver
from bgstyle.selectors import SelectorInterpolator


@pytest.fixture(autouse=True)
def reset_globals() -> None:
    # config and the variant registry are module-global
    config.set_emission_mode("per_entity")
    config.set_fragment_key_prefix("bgstyle")
    variants._VARIANTS.clear()
    variants.register_default_variants()
    yield
    config.set_emission_mode("per_entity")
    config.set_fragment_key_prefix("bgstyle")


@pytest.fixture
def styles() -> InMemoryStyleRegistry:
    return InMemoryStyleRegistry(
        [
            ImageStyle(name="thumbnail", label="Thumbnail (100×100)"),
            ImageStyle(name="large", label="Large (480×480)"),
        ]
    )


@pytest.fixture
def files() -> InMemoryFileStorage:
    return InMemoryFileStorage(
        [
            DirectFile(id="10", uri="public://a.png"),
            DirectFile(id="11", uri="public://b.jpg"),
        ]
    )


@pytest.fixture
def resolver(styles, files) -> AssetResolver:
    return AssetResolver(styles=styles, files=files)


@pytest.fixture
def builder() -> StyleFragmentBuilder:
    return StyleFragmentBuilder(PublicFilesUrls())


@pytest.fixture
def pipeline(resolver, builder) -> RenderPipeline:
    return RenderPipeline(
        resolver=resolver,
        interpolator=SelectorInterpolator(BracketTokenResolver()),
        builder=builder,
    )
