import sys

import anyio
import httpx
from structlog import get_logger

from ggleap_mcp.auth import GGLeapError, TransportError, configure
from ggleap_mcp.config import get_settings
from ggleap_mcp.dependencies import ServerState
from ggleap_mcp.logging_config import configure_logging
from ggleap_mcp.mcp_transport.stdio import serve

logger = get_logger()


async def startup_configure(state: ServerState) -> None:
    """Configure the gateway from GGLEAP_AUTH_TOKEN when it is set.

    A failure leaves the server unconfigured; ggleap_configure can still
    be called by the client.
    """
    settings = get_settings()
    if not settings.GGLEAP_AUTH_TOKEN:
        return

    try:
        state.auth = await configure(
            client=state.http_client,
            auth_token=settings.GGLEAP_AUTH_TOKEN,
            environment=settings.GGLEAP_ENVIRONMENT,
        )
    except (GGLeapError, TransportError) as e:
        logger.error("startup_configure_failed", error=str(e))


async def main() -> None:
    settings = get_settings()

    async with httpx.AsyncClient() as http_client:
        state = ServerState(http_client=http_client)
        await startup_configure(state)

        stdin = anyio.wrap_file(sys.stdin)
        stdout = anyio.wrap_file(sys.stdout)

        async def write_line(line: str) -> None:
            await stdout.write(line + "\n")
            await stdout.flush()

        logger.info("server_started", app=settings.APP_NAME, version=settings.APP_VERSION)
        await serve(state, stdin, write_line)


def run() -> None:
    """Console entry point."""
    configure_logging(get_settings().LOG_LEVEL)
    anyio.run(main)


if __name__ == "__main__":
    run()
