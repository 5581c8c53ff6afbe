# src/bgstyle/variants.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from .collaborators import StyleRegistry
from .entities import AssetReference, FieldDefinition, MediaWrapper, StyleSpec

RESPONSIVE_PROVIDER = "responsive_image"


@dataclass(frozen=True, slots=True)
class FormatterVariant:
    id: str
    label: str
    field_types: tuple[str, ...]
    is_applicable: Callable[[str | None], bool]
    is_image: Callable[[AssetReference], bool]
    responsive: bool = False
    provider: str | None = None

    def matches(self, field: FieldDefinition) -> bool:
        return field.field_type in self.field_types and self.is_applicable(
            field.target_type
        )


def _any_target(target_type: str | None) -> bool:
    # image fields hold files directly; the field type already decides it
    return True


def _media_target(target_type: str | None) -> bool:
    return target_type == "media"


def _always_image(entity: AssetReference) -> bool:
    return True


def _media_is_image(entity: AssetReference) -> bool:
    return isinstance(entity, MediaWrapper) and entity.source_plugin == "image"


FILE_VARIANT = FormatterVariant(
    id="bgstyle_file",
    label="Background Image",
    field_types=("image",),
    is_applicable=_any_target,
    is_image=_always_image,
)
MEDIA_VARIANT = FormatterVariant(
    id="bgstyle_media",
    label="Background Image",
    field_types=("entity_reference",),
    is_applicable=_media_target,
    is_image=_media_is_image,
)
RESPONSIVE_FILE_VARIANT = FormatterVariant(
    id="responsive_bgstyle_file",
    label="Responsive Background Image",
    field_types=("image",),
    is_applicable=_any_target,
    is_image=_always_image,
    responsive=True,
    provider=RESPONSIVE_PROVIDER,
)
RESPONSIVE_MEDIA_VARIANT = FormatterVariant(
    id="responsive_bgstyle_media",
    label="Responsive Background Image",
    field_types=("entity_reference",),
    is_applicable=_media_target,
    is_image=_media_is_image,
    responsive=True,
    provider=RESPONSIVE_PROVIDER,
)


# ---- Registry --------------------------------------------------------------------

_VARIANTS: list[FormatterVariant] = []


def register_variant(v: FormatterVariant) -> None:
    _VARIANTS[:] = [x for x in _VARIANTS if x.id != v.id]
    _VARIANTS.append(v)


def register_default_variants() -> None:
    for v in (
        FILE_VARIANT,
        MEDIA_VARIANT,
        RESPONSIVE_FILE_VARIANT,
        RESPONSIVE_MEDIA_VARIANT,
    ):
        register_variant(v)


def get_variant(variant_id: str) -> FormatterVariant:
    for v in _VARIANTS:
        if v.id == variant_id:
            return v
    raise KeyError(f"Unknown formatter variant: {variant_id!r}")


def applicable_variants(
    field: FieldDefinition, *, providers: Iterable[str] = ()
) -> list[FormatterVariant]:
    """
    All registered variants usable on `field`, in registration order.

    Variants that need a provider (e.g. responsive images) are only offered
    when that provider is listed in `providers`.
    """
    available = set(providers)
    return [
        v
        for v in _VARIANTS
        if v.matches(field) and (v.provider is None or v.provider in available)
    ]


def choose_variant(
    field: FieldDefinition,
    *,
    responsive: bool = False,
    providers: Iterable[str] = (),
) -> FormatterVariant | None:
    for v in applicable_variants(field, providers=providers):
        if v.responsive == responsive:
            return v
    return None


# ---- Settings --------------------------------------------------------------------


def default_settings() -> dict[str, str]:
    return {"selector": "", "image_style": ""}


def negotiate_settings(overrides: Mapping[str, Any] | None = None) -> StyleSpec:
    """
    Merge stored formatter settings over the defaults.

    Unknown keys are ignored and None falls back to the default; an unset
    selector stays "" (the pipeline refuses to emit a rule for it).
    """
    settings = default_settings()
    for key in settings:
        value = (overrides or {}).get(key)
        if value is not None:
            settings[key] = str(value)
    return StyleSpec(
        selector_template=settings["selector"],
        style_name=settings["image_style"],
    )


def image_style_options(styles: StyleRegistry) -> dict[str, str]:
    return {s.name: s.label for s in styles.list_styles()}


def settings_summary(spec: StyleSpec, styles: StyleRegistry) -> list[str]:
    selector = spec.selector_template or "None"
    handle = styles.lookup_style(spec.style_name) if spec.style_name else None
    style_label = handle.label if handle is not None else "None"
    return [
        f"CSS Selector: {selector}",
        f"Image Style: {style_label}",
    ]
