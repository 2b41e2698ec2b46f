"""Directory resources — channel and user snapshots as CSV."""

from dataclasses import dataclass
from urllib.parse import quote as url_quote

from .errors import NotFoundError
from .formatting import render_channels, render_users

CSV_MIME = "text/csv"


@dataclass(frozen=True)
class Resource:
    uri: str
    name: str
    description: str
    mime_type: str = CSV_MIME


def resource_catalog(scheme: str, workspace: str) -> list[Resource]:
    base = f"{scheme}://{url_quote(workspace, safe='')}"
    return [
        Resource(
            uri=f"{base}/channels",
            name="Slack Channels Directory",
            description="List of all accessible channels (DMs excluded)",
        ),
        Resource(
            uri=f"{base}/users",
            name="Slack Users Directory",
            description="List of all workspace users",
        ),
    ]


def read_resource(policy, scheme: str, uri: str) -> str:
    """Render the snapshot behind a resource URI.

    Raises:
        NotFoundError: URI is not one of the catalog's resources
    """
    uri = str(uri)
    if uri.startswith(f"{scheme}://"):
        if uri.endswith("/channels"):
            return render_channels(policy.visible_channels())
        if uri.endswith("/users"):
            return render_users(policy.directory.users())
    raise NotFoundError(f"Unknown resource: {uri}")
