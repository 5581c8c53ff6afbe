# src/bgstyle/pipeline.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from . import config
from .config import EmissionMode
from .entities import AssetReference, HeadTag, HostEntity, StyleFragment, StyleSpec
from .errors import EmptySelector, ResolutionError
from .fragments import StyleFragmentBuilder
from .resolver import AssetResolver
from .selectors import SelectorInterpolator
from .variants import FormatterVariant

logger = logging.getLogger(__name__)

ResponsiveHook = Callable[[StyleFragment, FormatterVariant], StyleFragment]


@dataclass(slots=True)
class RenderOutput:
    # inline field markup; always empty, the field only shows up as CSS
    elements: list[Any] = field(default_factory=list)
    attachments: list[tuple[HeadTag, str]] = field(default_factory=list)
    fragments: list[StyleFragment] = field(default_factory=list)


class RenderPipeline:
    def __init__(
        self,
        *,
        resolver: AssetResolver,
        interpolator: SelectorInterpolator,
        builder: StyleFragmentBuilder,
        responsive_hook: ResponsiveHook | None = None,
    ) -> None:
        self._resolver = resolver
        self._interpolator = interpolator
        self._builder = builder
        self._responsive_hook = responsive_hook

    def render(
        self,
        entities: Sequence[AssetReference],
        spec: StyleSpec,
        context: Mapping[str, Any] | None,
        variant: FormatterVariant,
        *,
        mode: EmissionMode | None = None,
    ) -> list[StyleFragment]:
        """
        Produce the style fragments for one field.

        Non-image entities are dropped first. An entity that fails to
        resolve is logged and skipped; the rest of the field still renders.
        """
        mode = mode or config.get_emission_mode()

        images = [e for e in entities if variant.is_image(e)]
        if len(images) != len(entities):
            logger.debug(
                "Skipped %d non-image entities for variant %s",
                len(entities) - len(images),
                variant.id,
            )
        if not images:
            return []

        resolved: list[tuple[AssetReference, str]] = []
        for entity in images:
            try:
                url = self._resolver.resolve(entity, spec.style_name)
            except ResolutionError as e:
                logger.warning("No background for %s %s: %s", entity.entity_type, entity.id, e)
                continue
            resolved.append((entity, url))

        if not resolved:
            return []

        selector = self._interpolator.interpolate(spec.selector_template, context)

        try:
            if mode == "combined":
                fragments = [
                    self._builder.build(
                        selector,
                        [url for _, url in resolved],
                        source_ids=[e.id for e, _ in resolved],
                    )
                ]
            else:
                fragments = [
                    self._builder.build(selector, [url], entity_id=e.id)
                    for e, url in resolved
                ]
        except EmptySelector:
            logger.warning(
                "Selector %r is empty after token replacement; no background emitted",
                spec.selector_template,
            )
            return []

        if variant.responsive and self._responsive_hook is not None:
            fragments = [self._responsive_hook(f, variant) for f in fragments]

        return fragments

    def view(
        self,
        items: Sequence[AssetReference],
        spec: StyleSpec,
        variant: FormatterVariant,
        *,
        host: HostEntity | None = None,
        mode: EmissionMode | None = None,
    ) -> RenderOutput:
        context = {host.entity_type: host} if host is not None else None
        fragments = self.render(items, spec, context, variant, mode=mode)
        return RenderOutput(
            attachments=[f.as_attachment() for f in fragments],
            fragments=fragments,
        )
