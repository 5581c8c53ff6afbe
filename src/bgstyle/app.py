# src/bgstyle/app.py
from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse

from .entities import FieldDefinition, StyleSpec
from .html import render_head, render_preview_page
from .pipeline import RenderOutput
from .schemas import FragmentOut, RenderRequest, RenderResponse
from .service import BackgroundService
from .site_config import apply_site_settings, get_site_settings
from .variants import (
    RESPONSIVE_PROVIDER,
    FormatterVariant,
    applicable_variants,
    get_variant,
    image_style_options,
    negotiate_settings,
    register_default_variants,
    settings_summary,
)

app = FastAPI(title="bgstyle preview")

register_default_variants()

# Load site settings once at startup; requests never touch bgstyle.config
apply_site_settings(get_site_settings())


def _service(req: RenderRequest | None = None) -> BackgroundService:
    files = req.direct_files() if req is not None else []
    return BackgroundService.from_settings(get_site_settings(), files=files)


def _variant(variant_id: str) -> FormatterVariant:
    try:
        return get_variant(variant_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown variant: {variant_id}")


def _run(req: RenderRequest) -> tuple[BackgroundService, StyleSpec, RenderOutput]:
    variant = _variant(req.variant)
    svc = _service(req)
    spec = negotiate_settings(req.settings.model_dump())
    out = svc.pipeline.view(
        req.references(), spec, variant, host=req.host_entity(), mode=req.mode
    )
    return svc, spec, out


@app.get("/styles")
def list_styles() -> dict[str, Any]:
    return {"styles": image_style_options(_service().styles)}


@app.get("/variants")
def list_variants(
    field_type: str,
    target_type: str | None = None,
    responsive: bool | None = None,
    responsive_provider: bool = True,
) -> dict[str, Any]:
    """
    Variants usable on a field shape.

    `responsive` filters to responsive (true) or fixed-style (false) variants;
    `responsive_provider=false` hides responsive variants entirely.
    """
    providers = [RESPONSIVE_PROVIDER] if responsive_provider else []
    field = FieldDefinition(field_type=field_type, target_type=target_type)
    return {
        "variants": [
            {"id": v.id, "label": v.label, "responsive": v.responsive}
            for v in applicable_variants(field, providers=providers)
            if responsive is None or v.responsive == responsive
        ]
    }


@app.post("/render", response_model=RenderResponse)
def render(req: RenderRequest) -> RenderResponse:
    svc, spec, out = _run(req)
    return RenderResponse(
        variant=req.variant,
        fragments=[
            FragmentOut(
                key=f.fragment_key, css=f.css_text, source_ids=list(f.source_ids)
            )
            for f in out.fragments
        ],
        head_html=render_head(out.attachments),
        summary=settings_summary(spec, svc.styles),
    )


@app.post("/preview", response_class=HTMLResponse)
def preview(req: RenderRequest) -> HTMLResponse:
    _, _, out = _run(req)
    return HTMLResponse(render_preview_page(attachments=out.attachments))
