"""Admin settings page.

One form with one text field (the workspace identifier) and a save button,
under a status banner computed from the stored value.  The field accepts any
string; there is no format validation.
"""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING, Final

from morrisb_tracking.plugin.managers.options import load_config
from morrisb_tracking.plugin.models.enums import ConnectionStatus
from morrisb_tracking.plugin.models.options import WorkspaceConfig

if TYPE_CHECKING:
    from morrisb_tracking.plugin.store.base import OptionsStore

SETTINGS_PATH: Final = "/admin/settings"

_BANNERS: Final[dict[ConnectionStatus, tuple[str, str]]] = {
    ConnectionStatus.ACTIVE: ("notice-success", "Tracking is active"),
    ConnectionStatus.NOT_CONNECTED: ("notice-warning", "Not connected"),
}


def render_status_banner(status: ConnectionStatus) -> str:
    css_class, label = _BANNERS[status]
    return f'<div class="notice {css_class}" data-status="{status.value}"><p>{label}</p></div>'


def render_settings_page(config: WorkspaceConfig, *, action_url: str = SETTINGS_PATH, saved: bool = False) -> str:
    """Render the settings page for *config*.

    ``saved`` adds the "Settings saved." notice shown after a redirect from
    the form POST.
    """
    saved_notice = '<div class="notice notice-info" data-notice="saved"><p>Settings saved.</p></div>' if saved else ""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>MorrisB Tracking Settings</title>
</head>
<body>
<div class="wrap">
<h1>MorrisB Tracking</h1>
{saved_notice}{render_status_banner(config.status)}
<form method="post" action="{escape(action_url, quote=True)}">
<table class="form-table" role="presentation">
<tr>
<th scope="row"><label for="morrisb-workspace-id">Workspace ID</label></th>
<td>
<input type="text" id="morrisb-workspace-id" name="workspace_id" class="regular-text" value="{escape(config.workspace_id, quote=True)}">
<p class="description">Find your Workspace ID under Settings &rarr; Website Tracking in MorrisB.</p>
</td>
</tr>
</table>
<p class="submit"><button type="submit" class="button button-primary">Save Changes</button></p>
</form>
</div>
</body>
</html>
"""


async def render_settings_form(store: OptionsStore, *, action_url: str = SETTINGS_PATH, saved: bool = False) -> str:
    """Read the stored identifier and render the settings page for it."""
    return render_settings_page(await load_config(store), action_url=action_url, saved=saved)
