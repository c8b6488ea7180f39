"""Installation check.

Fetches a live page and reports whether the tracking snippet is on it and
bound to the expected workspace.  Transport errors (DNS, connect, timeout)
are retried with bounded exponential backoff.  An HTTP error status, a
malformed URL or a non-HTTP scheme is reported as-is without a retry.
"""

from __future__ import annotations

from html import escape

import anyio
import httpx
from loguru import logger

from morrisb_tracking.plugin.models.api import VerifyResponse
from morrisb_tracking.plugin.models.enums import VerificationOutcome
from morrisb_tracking.plugin.settings import PluginSettings, get_settings
from morrisb_tracking.plugin.snippet import js_string_literal


class NotConfiguredError(ValueError):
    """Raised when verification is requested with no workspace identifier stored."""


def classify_page(html: str, *, script_url: str, workspace_id: str) -> VerificationOutcome:
    """Decide whether *html* carries the snippet for *workspace_id*."""
    if script_url not in html and escape(script_url, quote=True) not in html:
        return VerificationOutcome.SCRIPT_MISSING
    if js_string_literal(workspace_id) in html or f"'{workspace_id}'" in html:
        return VerificationOutcome.INSTALLED
    return VerificationOutcome.WORKSPACE_MISMATCH


def _unusable_url(url: str, detail: str, *, attempts: int = 1) -> VerifyResponse:
    logger.warning("Verification skipped (url={}): {}", url, detail)
    return VerifyResponse(url=url, outcome=VerificationOutcome.UNREACHABLE, attempts=attempts, detail=detail)


async def verify_installation(
    url: str,
    workspace_id: str,
    settings: PluginSettings | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    base_delay: float = 0.5,
    max_delay: float = 5.0,
) -> VerifyResponse:
    """Fetch *url* and classify it.

    Pass ``client`` to reuse a connection pool (or a mock transport in tests).
    Raises ``NotConfiguredError`` if *workspace_id* is empty.
    """
    if not workspace_id:
        msg = "Workspace ID is not configured"
        raise NotConfiguredError(msg)

    try:
        scheme = httpx.URL(url).scheme
    except httpx.InvalidURL as exc:
        return _unusable_url(url, str(exc))
    if scheme not in ("http", "https"):
        return _unusable_url(url, "URL must start with http:// or https://")

    settings = settings or get_settings()
    max_attempts = max(settings.verify_max_attempts, 1)

    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=settings.verify_timeout, follow_redirects=True)

    try:
        delay = base_delay
        attempt = 0
        while True:
            attempt += 1
            try:
                response = await client.get(url)
                break
            except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
                # Unusable URL or redirect target.
                return _unusable_url(url, str(exc), attempts=attempt)
            except httpx.TransportError as exc:
                logger.warning("Verification fetch failed (url={}, attempt={}/{}): {}", url, attempt, max_attempts, exc)
                if attempt >= max_attempts:
                    return VerifyResponse(
                        url=url,
                        outcome=VerificationOutcome.UNREACHABLE,
                        attempts=attempt,
                        detail=str(exc) or type(exc).__name__,
                    )
                await anyio.sleep(delay)
                delay = min(delay * 2, max_delay)
    finally:
        if owns_client:
            await client.aclose()

    if not response.is_success:
        return VerifyResponse(
            url=url,
            outcome=VerificationOutcome.UNREACHABLE,
            status_code=response.status_code,
            attempts=attempt,
            detail=f"HTTP {response.status_code}",
        )

    outcome = classify_page(response.text, script_url=settings.script_url, workspace_id=workspace_id)
    logger.info("Verified {} -> {}", url, outcome.value)
    return VerifyResponse(url=url, outcome=outcome, status_code=response.status_code, attempts=attempt)
