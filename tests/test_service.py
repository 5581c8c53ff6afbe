from __future__ import annotations

from bgstyle import config
from bgstyle.entities import DirectFile, StyleSpec
from bgstyle.service import BackgroundService
from bgstyle.site_config import SiteSettings, apply_site_settings
from bgstyle.variants import FILE_VARIANT


def test_from_settings_leaves_config_alone() -> None:
    config.set_emission_mode("per_entity")
    config.set_fragment_key_prefix("host_prefix")

    BackgroundService.from_settings(
        SiteSettings(emission_mode="combined", key_prefix="ini_prefix")
    )

    assert config.get_emission_mode() == "per_entity"
    assert config.get_fragment_key_prefix() == "host_prefix"


def test_apply_site_settings_sets_config() -> None:
    apply_site_settings(SiteSettings(emission_mode="combined", key_prefix="ini_prefix"))
    assert config.get_emission_mode() == "combined"
    assert config.get_fragment_key_prefix() == "ini_prefix"


def test_service_renders_private_files_with_served_path() -> None:
    svc = BackgroundService.from_settings(
        SiteSettings(private_path="/private-files"),
        files=[DirectFile(id="1", uri="private://a.png")],
    )
    frags = svc.pipeline.render(
        [DirectFile(id="1", uri="private://a.png")],
        StyleSpec(".x", "thumbnail"),
        None,
        FILE_VARIANT,
    )
    assert frags[0].css_text == (
        ".x { background-image: url('/private-files/styles/thumbnail/a.png'); }"
    )
