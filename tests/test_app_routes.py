from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import bgstyle.site_config as site_config
from bgstyle import config
from bgstyle.app import app


@pytest.fixture(autouse=True)
def default_site(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BGSTYLE_INI", raising=False)
    site_config._SITE_SETTINGS = None  # type: ignore[attr-defined]
    yield
    site_config._SITE_SETTINGS = None  # type: ignore[attr-defined]


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_styles_lists_default_styles(client: TestClient) -> None:
    resp = client.get("/styles")
    assert resp.status_code == 200
    assert resp.json()["styles"]["thumbnail"] == "Thumbnail (100×100)"


def test_variants_for_media_field(client: TestClient) -> None:
    resp = client.get("/variants?field_type=entity_reference&target_type=media")
    assert resp.status_code == 200
    ids = [v["id"] for v in resp.json()["variants"]]
    assert ids == ["bgstyle_media", "responsive_bgstyle_media"]


def test_variants_without_responsive_provider(client: TestClient) -> None:
    resp = client.get("/variants?field_type=image&responsive_provider=false")
    ids = [v["id"] for v in resp.json()["variants"]]
    assert ids == ["bgstyle_file"]


def test_render_direct_file(client: TestClient) -> None:
    resp = client.post(
        "/render",
        json={
            "variant": "bgstyle_file",
            "items": [{"type": "file", "id": "1", "uri": "public://a.png"}],
            "settings": {"selector": ".hero", "image_style": "thumbnail"},
        },
    )
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["fragments"]) == 1
    frag = data["fragments"][0]
    assert frag["css"] == (
        ".hero { background-image: url('/sites/default/files/styles/thumbnail/a.png'); }"
    )
    assert frag["key"].startswith("bgstyle__1__")
    assert frag["key"] in data["head_html"]
    assert data["summary"] == ["CSS Selector: .hero", "Image Style: Thumbnail (100×100)"]


def test_render_media_with_tokens_filters_documents(client: TestClient) -> None:
    resp = client.post(
        "/render",
        json={
            "variant": "bgstyle_media",
            "items": [
                {"type": "media", "id": "m1", "source_plugin": "image", "source_file_id": "5"},
                {"type": "media", "id": "m2", "source_plugin": "file", "source_file_id": "6"},
            ],
            "files": [
                {"id": "5", "uri": "public://hero.jpg"},
                {"id": "6", "uri": "public://doc.pdf"},
            ],
            "settings": {"selector": "#node-[node:nid]", "image_style": "large"},
            "host": {"entity_type": "node", "id": "42", "values": {"nid": 42}},
        },
    )
    assert resp.status_code == 200
    frags = resp.json()["fragments"]
    assert len(frags) == 1
    assert frags[0]["css"].startswith("#node-42 {")
    assert frags[0]["source_ids"] == ["m1"]


def test_render_combined_mode(client: TestClient) -> None:
    resp = client.post(
        "/render",
        json={
            "items": [
                {"id": "1", "uri": "public://a.png"},
                {"id": "2", "uri": "public://b.png"},
            ],
            "settings": {"selector": ".x", "image_style": "medium"},
            "mode": "combined",
        },
    )
    frags = resp.json()["fragments"]
    assert len(frags) == 1
    assert frags[0]["source_ids"] == ["1", "2"]


def test_render_empty_selector_yields_no_fragments(client: TestClient) -> None:
    resp = client.post(
        "/render",
        json={
            "items": [{"id": "1", "uri": "public://a.png"}],
            "settings": {"image_style": "thumbnail"},
        },
    )
    assert resp.status_code == 200
    assert resp.json()["fragments"] == []
    assert resp.json()["summary"][0] == "CSS Selector: None"


def test_render_unknown_variant_404(client: TestClient) -> None:
    resp = client.post("/render", json={"variant": "nope", "items": []})
    assert resp.status_code == 404


def test_render_bad_mode_422(client: TestClient) -> None:
    resp = client.post("/render", json={"items": [], "mode": "batched"})
    assert resp.status_code == 422


def test_preview_page_has_style_in_head(client: TestClient) -> None:
    resp = client.post(
        "/preview",
        json={
            "items": [{"id": "1", "uri": "public://a.png"}],
            "settings": {"selector": ".hero", "image_style": "thumbnail"},
        },
    )
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    head = resp.text.split("</head>")[0]
    assert "background-image: url('/sites/default/files/styles/thumbnail/a.png')" in head


def test_requests_do_not_reset_runtime_config(client: TestClient) -> None:
    config.set_emission_mode("combined")
    config.set_fragment_key_prefix("mysite")

    assert client.get("/styles").status_code == 200
    resp = client.post(
        "/render",
        json={
            "items": [
                {"id": "1", "uri": "public://a.png"},
                {"id": "2", "uri": "public://b.png"},
            ],
            "settings": {"selector": ".x", "image_style": "medium"},
        },
    )

    assert (config.get_emission_mode(), config.get_fragment_key_prefix()) == (
        "combined",
        "mysite",
    )
    frags = resp.json()["fragments"]
    assert len(frags) == 1
    assert frags[0]["key"].startswith("mysite__")


@pytest.mark.parametrize(
    "query, expected",
    [
        ("field_type=image&responsive=true", ["responsive_bgstyle_file"]),
        ("field_type=image&responsive=false", ["bgstyle_file"]),
        (
            "field_type=entity_reference&target_type=media&responsive=true",
            ["responsive_bgstyle_media"],
        ),
        ("field_type=image&responsive=true&responsive_provider=false", []),
    ],
)
def test_variants_filter_on_responsive(client: TestClient, query: str, expected) -> None:
    resp = client.get(f"/variants?{query}")
    assert resp.status_code == 200
    assert [v["id"] for v in resp.json()["variants"]] == expected
