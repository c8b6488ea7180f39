"""HTTP tests for the admin page, settings API and snippet API."""

from __future__ import annotations

from httpx import AsyncClient

from morrisb_tracking.plugin.app import app


async def test_admin_flow(client: AsyncClient) -> None:
    """Empty form -> POST abc123 -> form shows abc123 + active -> page carries the snippet."""
    resp = await client.get("/admin/settings")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert 'value=""' in resp.text
    assert 'data-status="not_connected"' in resp.text

    resp = await client.post("/admin/settings", data={"workspace_id": "abc123"})
    assert resp.status_code == 303
    assert resp.headers["location"] == "/admin/settings?updated=1"

    resp = await client.get("/admin/settings?updated=1")
    assert 'value="abc123"' in resp.text
    assert 'data-status="active"' in resp.text
    assert 'data-notice="saved"' in resp.text

    resp = await client.get("/")
    assert resp.status_code == 200
    assert '<script src="https://cdn.example.test/track.min.js" async></script>' in resp.text
    assert 'var workspaceId = "abc123";' in resp.text


async def test_demo_page_without_identifier_has_no_snippet(client: AsyncClient) -> None:
    resp = await client.get("/")
    assert resp.status_code == 200
    assert "<script" not in resp.text


async def test_admin_post_empty_clears(client: AsyncClient) -> None:
    await client.post("/admin/settings", data={"workspace_id": "abc123"})
    await client.post("/admin/settings", data={"workspace_id": ""})

    resp = await client.get("/api/settings/get")
    assert resp.json() == {"workspace_id": "", "status": "not_connected"}


async def test_settings_api_roundtrip(client: AsyncClient) -> None:
    resp = await client.get("/api/settings/get")
    assert resp.status_code == 200
    assert resp.json() == {"workspace_id": "", "status": "not_connected"}

    resp = await client.post("/api/settings/update", json={"workspace_id": " ws-1 "})
    assert resp.status_code == 200
    assert resp.json() == {"workspace_id": " ws-1 ", "status": "active"}

    resp = await client.get("/api/settings/get")
    assert resp.json()["workspace_id"] == " ws-1 "


async def test_settings_update_rejects_non_string(client: AsyncClient) -> None:
    resp = await client.post("/api/settings/update", json={"workspace_id": ["not", "a", "string"]})
    assert resp.status_code == 422


async def test_snippet_api(client: AsyncClient) -> None:
    resp = await client.get("/api/snippet")
    assert resp.json() == {
        "configured": False,
        "script_url": "https://cdn.example.test/track.min.js",
        "html": "",
    }

    await client.post("/api/settings/update", json={"workspace_id": "abc123"})
    body = (await client.get("/api/snippet")).json()
    assert body["configured"] is True
    assert 'var workspaceId = "abc123";' in body["html"]


async def test_verify_requires_identifier(client: AsyncClient) -> None:
    resp = await client.post("/api/verify", json={"url": "https://example.test/"})
    assert resp.status_code == 409


async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


async def test_store_unavailable_returns_503(client: AsyncClient) -> None:
    app.state.options_store = None
    resp = await client.get("/admin/settings")
    assert resp.status_code == 503


async def test_verify_malformed_url_reports_unreachable(client: AsyncClient) -> None:
    await client.post("/api/settings/update", json={"workspace_id": "abc123"})

    for url in ("http://[::1", "example.com"):
        resp = await client.post("/api/verify", json={"url": url})
        assert resp.status_code == 200
        body = resp.json()
        assert body["outcome"] == "unreachable"
        assert body["attempts"] == 1
        assert body["status_code"] is None


async def test_update_rejects_unencodable_identifier(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/settings/update",
        content=b'{"workspace_id": "a\\ud800"}',
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Workspace ID must be valid Unicode text"

    resp = await client.get("/api/settings/get")
    assert resp.json() == {"workspace_id": "", "status": "not_connected"}
