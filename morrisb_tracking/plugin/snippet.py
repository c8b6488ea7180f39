"""Tracking snippet rendering.

The snippet is two ``<script>`` elements: a reference to the external
tracking script, and an inline bootstrap that waits for the script's global
init function and calls it once with the workspace identifier.

The wait is bounded.  The bootstrap polls with exponential backoff, stops
after ``max_attempts`` misses and dispatches ``morrisb:load-failed`` on
``window``.  ``window.__morrisbBootstrap.cancel()`` (also wired to
``pagehide``) clears a pending timer.  On success it dispatches
``morrisb:ready``.

Nothing is emitted for an unconfigured site.
"""

from __future__ import annotations

import json
import re
from html import escape
from string import Template
from typing import TYPE_CHECKING

from morrisb_tracking.plugin.managers.options import read_workspace_id
from morrisb_tracking.plugin.models.options import BootstrapPolicy
from morrisb_tracking.plugin.settings import DEFAULT_SCRIPT_URL, PluginSettings, get_settings

if TYPE_CHECKING:
    from morrisb_tracking.plugin.store.base import OptionsStore

READY_EVENT = "morrisb:ready"
LOAD_FAILED_EVENT = "morrisb:load-failed"
CANCEL_HANDLE = "__morrisbBootstrap"

# Characters that are legal inside a JSON string but unsafe inside an inline
# <script>: "</script>" / "<!--" and the JS line terminators U+2028/U+2029.
_SCRIPT_ESCAPES = {
    ord("<"): "\\u003c",
    ord(">"): "\\u003e",
    ord("&"): "\\u0026",
    0x2028: "\\u2028",
    0x2029: "\\u2029",
}

_BOOTSTRAP = Template(
    """(function (w) {
  var fn = $init_function;
  var workspaceId = $workspace_id;
  var interval = $interval_ms, backoff = $backoff, maxInterval = $max_interval_ms, maxAttempts = $max_attempts;
  var attempts = 0, timer = null, done = false;
  function emit(name, detail) {
    if (typeof w.CustomEvent === "function") {
      w.dispatchEvent(new w.CustomEvent(name, { detail: detail }));
    }
  }
  function cancel() {
    done = true;
    if (timer !== null) {
      w.clearTimeout(timer);
      timer = null;
    }
  }
  function tick() {
    timer = null;
    if (done) return;
    if (typeof w[fn] === "function") {
      done = true;
      w[fn](workspaceId);
      emit($ready_event, { attempts: attempts });
      return;
    }
    if (attempts >= maxAttempts) {
      done = true;
      if (w.console) w.console.warn("MorrisB tracking script did not load after " + attempts + " attempts");
      emit($failed_event, { attempts: attempts });
      return;
    }
    attempts += 1;
    timer = w.setTimeout(tick, Math.min(interval, maxInterval));
    interval = Math.min(interval * backoff, maxInterval);
  }
  w[$cancel_handle] = { cancel: cancel };
  w.addEventListener("pagehide", cancel);
  tick();
})(window);"""
)

_HEAD_CLOSE = re.compile(r"</head\s*>", re.IGNORECASE)
_BODY_CLOSE = re.compile(r"</body\s*>", re.IGNORECASE)


def js_string_literal(value: str) -> str:
    """Encode *value* as a JS string literal safe to embed in an inline script."""
    return json.dumps(value, ensure_ascii=False).translate(_SCRIPT_ESCAPES)


def render_script_tag(script_url: str) -> str:
    return f'<script src="{escape(script_url, quote=True)}" async></script>'


def render_bootstrap(workspace_id: str, policy: BootstrapPolicy, init_function: str = "morrisb") -> str:
    """Inline ``<script>`` calling ``window[init_function](workspace_id)`` once loaded."""
    body = _BOOTSTRAP.substitute(
        init_function=js_string_literal(init_function),
        workspace_id=js_string_literal(workspace_id),
        interval_ms=policy.interval_ms,
        backoff=repr(policy.backoff),
        max_interval_ms=policy.max_interval_ms,
        max_attempts=policy.max_attempts,
        ready_event=js_string_literal(READY_EVENT),
        failed_event=js_string_literal(LOAD_FAILED_EVENT),
        cancel_handle=js_string_literal(CANCEL_HANDLE),
    )
    return f"<script>\n{body}\n</script>"


def render_snippet(
    workspace_id: str,
    *,
    script_url: str = DEFAULT_SCRIPT_URL,
    policy: BootstrapPolicy | None = None,
    init_function: str = "morrisb",
) -> str:
    """Render the full snippet, or ``""`` when *workspace_id* is empty."""
    if not workspace_id:
        return ""
    policy = policy or BootstrapPolicy()
    return "\n".join([
        render_script_tag(script_url),
        render_bootstrap(workspace_id, policy, init_function),
    ])


async def emit_tracking_snippet(store: OptionsStore, settings: PluginSettings | None = None) -> str:
    """Render the snippet for the identifier currently held in *store*."""
    settings = settings or get_settings()
    workspace_id = await read_workspace_id(store)
    return render_snippet(
        workspace_id,
        script_url=settings.script_url,
        policy=BootstrapPolicy.from_settings(settings),
        init_function=settings.init_function,
    )


def inject_snippet(page_html: str, snippet: str) -> str:
    """Insert *snippet* before ``</head>``, else before ``</body>``, else append it."""
    if not snippet:
        return page_html
    for pattern in (_HEAD_CLOSE, _BODY_CLOSE):
        match = pattern.search(page_html)
        if match is not None:
            return f"{page_html[: match.start()]}{snippet}\n{page_html[match.start() :]}"
    return f"{page_html}\n{snippet}"
