from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .entities import DirectFile, MediaWrapper, AssetReference
from .service import BackgroundService
from .site_config import apply_site_settings, get_site_settings, load_site_settings
from .variants import (
    FILE_VARIANT,
    MEDIA_VARIANT,
    image_style_options,
    negotiate_settings,
)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bgstyle", description="bgstyle – image fields as background-image CSS"
    )
    p.add_argument("--ini", type=Path, default=None, help="Path to a bgstyle.ini")
    sub = p.add_subparsers(dest="cmd", required=True)

    render_p = sub.add_parser(
        "render", help="Print the CSS fragments for one or more file URIs"
    )
    render_p.add_argument("uris", nargs="+", help="File URIs, e.g. public://a.png")
    render_p.add_argument("--style", required=True, help="Image style machine name")
    render_p.add_argument("--selector", required=True, help="CSS selector")
    render_p.add_argument(
        "--media",
        action="store_true",
        help="Wrap each file in an image media item (exercises media resolution)",
    )
    render_p.add_argument(
        "--combined",
        action="store_true",
        help="Emit one combined rule instead of one rule per image",
    )
    render_p.add_argument(
        "--keys", action="store_true", help="Print each fragment key before its CSS"
    )

    sub.add_parser("styles", help="List the configured image styles")

    serve_p = sub.add_parser("serve", help="Serve the HTTP preview app")
    serve_p.add_argument(
        "--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)"
    )
    serve_p.add_argument(
        "--port", type=int, default=8000, help="Port to bind (default: 8000)"
    )
    serve_p.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce uvicorn logging noise",
    )

    return p


def _references(
    uris: list[str], *, media: bool
) -> tuple[list[AssetReference], list[DirectFile]]:
    files = [DirectFile(id=str(i), uri=u) for i, u in enumerate(uris, start=1)]
    if not media:
        return list(files), files
    items: list[AssetReference] = [
        MediaWrapper(id=f"m{f.id}", source_plugin="image", source_file_id=f.id)
        for f in files
    ]
    return items, files


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_site_settings(args.ini) if args.ini else get_site_settings()
        apply_site_settings(settings)
    except ValueError as e:
        print(f"bgstyle: {e}", file=sys.stderr)
        return 2

    if args.cmd == "styles":
        svc = BackgroundService.from_settings(settings)
        for name, label in image_style_options(svc.styles).items():
            print(f"{name}\t{label}")
        return 0

    if args.cmd == "render":
        items, files = _references(args.uris, media=args.media)
        svc = BackgroundService.from_settings(settings, files=files)
        if svc.styles.lookup_style(args.style) is None:
            print(f"bgstyle: unknown image style {args.style!r}", file=sys.stderr)
            return 1

        spec = negotiate_settings({"selector": args.selector, "image_style": args.style})
        fragments = svc.pipeline.render(
            items,
            spec,
            None,
            MEDIA_VARIANT if args.media else FILE_VARIANT,
            mode="combined" if args.combined else None,
        )
        if not fragments:
            print("bgstyle: nothing to emit", file=sys.stderr)
            return 1
        for f in fragments:
            if args.keys:
                print(f"/* {f.fragment_key} */")
            print(f.css_text)
        return 0

    if args.cmd == "serve":
        import uvicorn

        uvicorn.run(
            "bgstyle.app:app",
            host=args.host,
            port=args.port,
            log_level="warning" if args.quiet else "info",
        )
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
