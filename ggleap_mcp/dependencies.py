"""Process-wide state shared by the transport and tool handlers."""

from dataclasses import dataclass

import httpx

from ggleap_mcp.auth import GGLeapAuth


@dataclass
class ServerState:
    """Shared HTTP client plus the gateway created by ggleap_configure.

    Attributes:
        http_client: Client reused for every GGLeap round trip.
        auth: Configured gateway, or None until ggleap_configure succeeds.
    """

    http_client: httpx.AsyncClient
    auth: GGLeapAuth | None = None
