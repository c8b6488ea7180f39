"""Run the inline bootstrap under node against a stubbed ``window``.

Timers are driven by hand, so the recorded delays are exactly what the
bootstrap passed to ``setTimeout``.
"""

from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path

import pytest

from morrisb_tracking.plugin.models.options import BootstrapPolicy
from morrisb_tracking.plugin.snippet import LOAD_FAILED_EVENT, READY_EVENT, render_bootstrap

_node = shutil.which("node")

pytestmark = pytest.mark.skipif(_node is None, reason="node is not installed")

_PRELUDE = """
const config = %s;
const timers = [];
const events = [];
const calls = [];
const listeners = {};
let nextId = 1;
const w = {
  setTimeout(fn, delay) { const id = nextId++; timers.push({ id, fn, delay }); return id; },
  clearTimeout(id) { const i = timers.findIndex((t) => t.id === id); if (i >= 0) timers.splice(i, 1); },
  addEventListener(name, fn) { (listeners[name] = listeners[name] || []).push(fn); },
  dispatchEvent(event) { events.push({ type: event.type, detail: event.detail }); },
  CustomEvent: function (type, init) { this.type = type; this.detail = init.detail; },
  console: { warn() {} },
};
const window = w;
if (config.preloaded) w.morrisb = (id) => calls.push(id);
"""

_DRIVER = """
const delays = [];
let cancelled = false;
while (timers.length) {
  if (!cancelled && config.cancelAfter !== null && delays.length === config.cancelAfter) {
    if (config.cancelVia === "pagehide") listeners.pagehide.forEach((fn) => fn());
    else w.__morrisbBootstrap.cancel();
    cancelled = true;
    continue;
  }
  if (config.loadAfter !== null && delays.length === config.loadAfter) w.morrisb = (id) => calls.push(id);
  const timer = timers.shift();
  delays.push(timer.delay);
  timer.fn();
}
process.stdout.write(JSON.stringify({ delays, events, calls, pending: timers.length }));
"""


def _run(
    tmp_path: Path,
    policy: BootstrapPolicy,
    workspace_id: str = "abc123",
    *,
    preloaded: bool = False,
    load_after: int | None = None,
    cancel_after: int | None = None,
    cancel_via: str = "handle",
) -> dict:
    config = {
        "preloaded": preloaded,
        "loadAfter": load_after,
        "cancelAfter": cancel_after,
        "cancelVia": cancel_via,
    }
    bootstrap = render_bootstrap(workspace_id, policy).removeprefix("<script>\n").removesuffix("\n</script>")
    script = tmp_path / "bootstrap.js"
    script.write_text(_PRELUDE % json.dumps(config) + bootstrap + "\n" + _DRIVER, encoding="utf-8")
    result = subprocess.run([_node, str(script)], capture_output=True, text=True, check=True, timeout=30)
    return json.loads(result.stdout)


def test_gives_up_after_max_attempts(tmp_path: Path) -> None:
    policy = BootstrapPolicy(max_attempts=4)
    out = _run(tmp_path, policy)

    assert [round(d) for d in out["delays"]] == policy.delays() == [100, 150, 225, 338]
    assert out["events"] == [{"type": LOAD_FAILED_EVENT, "detail": {"attempts": 4}}]
    assert out["calls"] == []
    assert out["pending"] == 0


def test_default_schedule_matches_policy(tmp_path: Path) -> None:
    policy = BootstrapPolicy()
    out = _run(tmp_path, policy)

    assert [round(d) for d in out["delays"]] == policy.delays()
    assert len(out["delays"]) == 50
    assert max(out["delays"]) == 2000
    assert out["events"][-1]["type"] == LOAD_FAILED_EVENT


def test_first_delay_is_capped(tmp_path: Path) -> None:
    policy = BootstrapPolicy(interval_ms=5000, max_interval_ms=2000, max_attempts=3)
    out = _run(tmp_path, policy)

    assert out["delays"] == [2000, 2000, 2000]
    assert policy.delays() == [2000, 2000, 2000]


def test_calls_init_once_when_script_arrives(tmp_path: Path) -> None:
    out = _run(tmp_path, BootstrapPolicy(), load_after=2)

    assert out["calls"] == ["abc123"]
    assert len(out["delays"]) == 3
    assert out["events"] == [{"type": READY_EVENT, "detail": {"attempts": 3}}]
    assert out["pending"] == 0


def test_already_loaded_script_is_called_immediately(tmp_path: Path) -> None:
    out = _run(tmp_path, BootstrapPolicy(), preloaded=True)

    assert out["delays"] == []
    assert out["calls"] == ["abc123"]
    assert out["events"] == [{"type": READY_EVENT, "detail": {"attempts": 0}}]


def test_identifier_reaches_init_unchanged(tmp_path: Path) -> None:
    workspace_id = 'a"b</script><!-- x'
    out = _run(tmp_path, BootstrapPolicy(), workspace_id, preloaded=True)
    assert out["calls"] == [workspace_id]


@pytest.mark.parametrize("cancel_via", ["handle", "pagehide"])
def test_cancel_stops_polling(tmp_path: Path, cancel_via: str) -> None:
    out = _run(tmp_path, BootstrapPolicy(), load_after=5, cancel_after=2, cancel_via=cancel_via)

    assert len(out["delays"]) == 2
    assert out["pending"] == 0
    assert out["calls"] == []
    assert out["events"] == []
