from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from fastapi.routing import APIRouter
from loguru import logger

from morrisb_tracking.plugin.deps import Plugin
from morrisb_tracking.plugin.log import setup_logging
from morrisb_tracking.plugin.settings import get_settings
from morrisb_tracking.plugin.store import OptionsStoreUnavailableError, create_options_store


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    setup_logging(settings.log_level)

    logger.info("Tracking plugin host starting (host={}, port={})", settings.host, settings.port)
    logger.info("Tracking script: {}", settings.script_url)

    # -- Options store ---------------------------------------------------------
    _app.state.options_store = None
    try:
        _app.state.options_store = create_options_store(settings)
        logger.info("Options store: {}", settings.options_store)
    except OptionsStoreUnavailableError as exc:
        logger.error("Options store unavailable -- settings endpoints disabled: {}", exc)

    yield

    # -- Shutdown --------------------------------------------------------------
    if _app.state.options_store is not None:
        await _app.state.options_store.aclose()
        logger.info("Options store: closed")


app = FastAPI(title="MorrisB Tracking Plugin", lifespan=lifespan)

# ---------------------------------------------------------------------------
# API router -- JSON endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


from morrisb_tracking.plugin.routers.admin import router as admin_router  # noqa: E402
from morrisb_tracking.plugin.routers.settings import router as settings_router  # noqa: E402
from morrisb_tracking.plugin.routers.snippet import router as snippet_router  # noqa: E402

api.include_router(settings_router)
api.include_router(snippet_router)

app.include_router(api)
app.include_router(admin_router)

# ---------------------------------------------------------------------------
# Demo host page -- every host-rendered page goes through the inject filter
# ---------------------------------------------------------------------------
_DEMO_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>MorrisB Tracking Demo</title>
</head>
<body>
<h1>Demo page</h1>
<p>Configure the plugin at <a href="/admin/settings">/admin/settings</a>.</p>
</body>
</html>
"""


@app.get("/", response_class=HTMLResponse)
async def demo_page(plugin: Plugin) -> str:
    return await plugin.inject(_DEMO_PAGE)
