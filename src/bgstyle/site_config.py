# src/bgstyle/site_config.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import configparser
import os
import re

from . import config
from .config import EmissionMode
from .memory import DEFAULT_BASE_URL, DEFAULT_PRIVATE_PATH, DEFAULT_PUBLIC_PATH

_PREFIX_RE = re.compile(r"^[A-Za-z0-9_\-]+$")

DEFAULT_EMISSION_MODE: EmissionMode = "per_entity"
DEFAULT_KEY_PREFIX = "bgstyle"
DEFAULT_IMAGE_STYLES: dict[str, str] = {
    "thumbnail": "Thumbnail (100×100)",
    "medium": "Medium (220×220)",
    "large": "Large (480×480)",
}


@dataclass(frozen=True, slots=True)
class SiteSettings:
    base_url: str = DEFAULT_BASE_URL
    public_path: str = DEFAULT_PUBLIC_PATH
    private_path: str = DEFAULT_PRIVATE_PATH
    emission_mode: EmissionMode = DEFAULT_EMISSION_MODE
    key_prefix: str = DEFAULT_KEY_PREFIX
    image_styles: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_IMAGE_STYLES)
    )
    source: Path | None = None


def _strip_quotes(s: str) -> str:
    s = s.strip()
    if len(s) >= 2 and ((s[0] == s[-1] == "'") or (s[0] == s[-1] == '"')):
        return s[1:-1].strip()
    return s


def _resolve_ini_path() -> Path | None:
    """
    Resolution order:
      1) env var BGSTYLE_INI
      2) ./bgstyle.ini (cwd)
      3) None
    """
    env_path = os.environ.get("BGSTYLE_INI")
    if env_path:
        p = Path(env_path).expanduser()
        if p.exists() and p.is_file():
            return p

    cwd_ini = Path.cwd() / "bgstyle.ini"
    if cwd_ini.exists() and cwd_ini.is_file():
        return cwd_ini

    return None


def load_site_settings(path: Path | None = None) -> SiteSettings:
    """
    Load an optional bgstyle.ini; no file means all defaults.

    [site]          base_url, public_path, private_path, emission_mode, key_prefix
    [image-styles]  one `name = label` line per style (replaces the defaults)
    """
    ini_path = path or _resolve_ini_path()
    if ini_path is None:
        return SiteSettings()

    cfg = configparser.ConfigParser()
    # keep style machine names as written
    cfg.optionxform = str  # type: ignore[assignment,method-assign]
    cfg.read(ini_path, encoding="utf-8")

    base_url = DEFAULT_BASE_URL
    public_path = DEFAULT_PUBLIC_PATH
    private_path = DEFAULT_PRIVATE_PATH
    emission_mode: EmissionMode = DEFAULT_EMISSION_MODE
    key_prefix = DEFAULT_KEY_PREFIX

    if cfg.has_section("site"):
        section = "site"
        base_url = _strip_quotes(cfg.get(section, "base_url", fallback=base_url)) or base_url
        public_path = (
            _strip_quotes(cfg.get(section, "public_path", fallback=public_path)) or public_path
        )
        private_path = (
            _strip_quotes(cfg.get(section, "private_path", fallback=private_path)) or private_path
        )
        raw_mode = _strip_quotes(cfg.get(section, "emission_mode", fallback=emission_mode))
        if raw_mode not in ("per_entity", "combined"):
            raise ValueError(
                f"{ini_path}: emission_mode must be 'per_entity' or 'combined', got {raw_mode!r}"
            )
        emission_mode = raw_mode  # type: ignore[assignment]
        key_prefix = _strip_quotes(cfg.get(section, "key_prefix", fallback=key_prefix)) or key_prefix
        if not _PREFIX_RE.match(key_prefix):
            raise ValueError(f"{ini_path}: invalid key_prefix {key_prefix!r}")

    image_styles = dict(DEFAULT_IMAGE_STYLES)
    if cfg.has_section("image-styles"):
        image_styles = {
            name.strip(): _strip_quotes(label) or name.strip()
            for name, label in cfg.items("image-styles")
        }

    return SiteSettings(
        base_url=base_url,
        public_path=public_path,
        private_path=private_path,
        emission_mode=emission_mode,
        key_prefix=key_prefix,
        image_styles=image_styles,
        source=ini_path,
    )


_SITE_SETTINGS: SiteSettings | None = None


def get_site_settings() -> SiteSettings:
    global _SITE_SETTINGS
    if _SITE_SETTINGS is None:
        _SITE_SETTINGS = load_site_settings()
    return _SITE_SETTINGS


def apply_site_settings(settings: SiteSettings) -> None:
    """Push emission mode and key prefix into bgstyle.config (startup only)."""
    config.set_emission_mode(settings.emission_mode)
    config.set_fragment_key_prefix(settings.key_prefix)
