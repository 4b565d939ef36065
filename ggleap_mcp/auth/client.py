"""JWT lifecycle and authenticated request forwarding for the GGLeap API."""

import time
from typing import Any, Callable, Mapping

import httpx
from structlog import get_logger

from ggleap_mcp.config import BASE_URLS, Environment, base_url_for

from .exceptions import ApiError, AuthenticationError

logger = get_logger()

# Lifetime the backend grants a JWT; the server does not report it.
TOKEN_LIFETIME_SECONDS = 10 * 60
# Refresh this long before the locally computed expiry.
REFRESH_THRESHOLD_SECONDS = 60

AUTH_PATH = "/authorization/public-api/auth"


class GGLeapAuth:
    """Owns the GGLeap JWT and funnels every API call through it.

    The JWT is fetched lazily on first use and refreshed whenever fewer than
    REFRESH_THRESHOLD_SECONDS remain before its expiry. Concurrent callers
    that all see a stale token each trigger a refresh; the last one wins.

    Attributes:
        base_url: API base URL, e.g. https://api.ggleap.com/production.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        auth_token: str,
        base_url: str = BASE_URLS[Environment.PRODUCTION],
        clock: Callable[[], float] = time.time,
    ):
        """Create a gateway bound to one static auth token.

        Args:
            client: Shared HTTP client used for every round trip.
            auth_token: Static secret from the GGLeap admin panel.
            base_url: API base URL without trailing slash.
            clock: Source of wall-clock seconds, injectable for tests.
        """
        self._client = client
        self._auth_token = auth_token
        self._base_url = base_url
        self._clock = clock
        self._jwt: str | None = None
        self._jwt_expiry: float | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def jwt_expiry(self) -> float | None:
        """Locally computed expiry of the current JWT, or None if never fetched."""
        return self._jwt_expiry

    async def get_jwt(self) -> str:
        """Return a JWT valid for at least REFRESH_THRESHOLD_SECONDS.

        Raises:
            AuthenticationError: If a required refresh is rejected.
        """
        now = self._clock()

        if (
            self._jwt is None
            or self._jwt_expiry is None
            or now > self._jwt_expiry - REFRESH_THRESHOLD_SECONDS
        ):
            await self.refresh_jwt()

        return self._jwt

    async def refresh_jwt(self) -> None:
        """Exchange the static auth token for a new JWT.

        On failure the previously cached JWT is left in place.

        Raises:
            AuthenticationError: If the auth endpoint returns a non-2xx status.
        """
        response = await self._client.post(
            f"{self._base_url}{AUTH_PATH}",
            json={"AuthToken": self._auth_token},
            headers={"Content-Type": "application/json"},
        )

        if not response.is_success:
            logger.warning(
                "token_refresh_failed",
                status_code=response.status_code,
                base_url=self._base_url,
            )
            raise AuthenticationError(
                status_code=response.status_code,
                status_text=response.reason_phrase,
            )

        data = response.json()
        self._jwt = data["Jwt"]
        self._jwt_expiry = self._clock() + TOKEN_LIFETIME_SECONDS
        logger.info("token_refreshed", base_url=self._base_url, expires_at=self._jwt_expiry)

    async def request(
        self,
        path: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        content: str | bytes | None = None,
    ) -> Any:
        """Call the GGLeap API with the current JWT attached.

        Caller headers override the default Authorization and Content-Type
        headers on key collision (case-insensitive).

        Args:
            path: Path relative to the base URL, e.g. "/machines/get-all".
            method: HTTP method.
            headers: Extra request headers.
            params: Query string parameters.
            json: JSON-serializable request body.
            content: Raw request body, used when json is None.

        Returns:
            The parsed JSON response body, unchanged.

        Raises:
            AuthenticationError: If refreshing the JWT fails.
            ApiError: If the API returns a non-2xx status.
            httpx.TransportError: On network failure; not wrapped.
        """
        jwt = await self.get_jwt()

        merged_headers = httpx.Headers({
            "Authorization": f"Bearer {jwt}",
            "Content-Type": "application/json",
        })
        if headers:
            merged_headers.update(headers)

        response = await self._client.request(
            method,
            f"{self._base_url}{path}",
            headers=merged_headers,
            params=params,
            json=json,
            content=content,
        )

        if not response.is_success:
            logger.warning(
                "api_request_failed",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise ApiError(
                status_code=response.status_code,
                status_text=response.reason_phrase,
                body=response.text,
            )

        return response.json()


async def configure(
    client: httpx.AsyncClient,
    auth_token: str,
    environment: Environment | str = Environment.PRODUCTION,
    clock: Callable[[], float] = time.time,
) -> GGLeapAuth:
    """Build a gateway for an environment and fetch its first JWT.

    Args:
        client: Shared HTTP client.
        auth_token: Static secret from the GGLeap admin panel.
        environment: "production" or "beta".
        clock: Source of wall-clock seconds.

    Returns:
        A gateway holding a freshly fetched JWT.

    Raises:
        ValueError: If the environment is unknown.
        AuthenticationError: If the auth token is rejected.
    """
    environment = Environment(environment)
    auth = GGLeapAuth(
        client=client,
        auth_token=auth_token,
        base_url=base_url_for(environment),
        clock=clock,
    )
    await auth.refresh_jwt()
    logger.info("gateway_configured", environment=environment.value)
    return auth
