"""
Async client for the Iconify SVG API with retry and circuit breaker protection.
"""

import asyncio
import logging
from typing import Optional, Protocol
from urllib.parse import quote

import aiohttp

from iconpack_cli import __version__
from iconpack_cli.exceptions import (
    EmptyResponseBodyError,
    FetchFailedError,
    MalformedIconSpecError,
)
from iconpack_cli.models.config import DEFAULT_API_BASE, DEFAULT_FILL_COLOR
from iconpack_cli.utils.circuit_breaker import CircuitBreaker, CircuitBreakerError

log = logging.getLogger(__name__)

USER_AGENT = f"iconpack-cli/{__version__}"
CONNECTIVITY_ICON = "mdi-home"


class IconFetcher(Protocol):
    """Anything that can turn an icon URL into SVG bytes."""

    async def fetch(self, url: str) -> bytes: ...


def split_icon_spec(spec: str) -> tuple[str, str]:
    """
    Splits a remote icon spec at its first hyphen.

    'mdi-arrow-left' -> ('mdi', 'arrow-left')

    Raises:
        MalformedIconSpecError: If the spec has no hyphen or an empty side.
    """
    prefix, sep, rest = spec.partition("-")
    if not sep or not prefix or not rest:
        raise MalformedIconSpecError(
            f"Icon spec '{spec}' is not of the form 'prefix-name'."
        )
    return prefix, rest


def build_icon_url(
    spec: str, api_base: str = DEFAULT_API_BASE, color: str = DEFAULT_FILL_COLOR
) -> str:
    """Builds the SVG download URL for a spec, forcing a flat fill color."""
    prefix, rest = split_icon_spec(spec)
    return (
        f"{api_base}/{quote(prefix, safe='')}/{quote(rest, safe='')}.svg"
        f"?color={quote(color, safe='')}"
    )


def is_outage(exc: BaseException) -> bool:
    """
    True for errors that say the API is unreachable or overloaded: network
    errors, timeouts, 5xx and 429. Unknown icons and empty bodies are answers.
    """
    if isinstance(exc, EmptyResponseBodyError):
        return False
    if isinstance(exc, aiohttp.ClientResponseError):
        return exc.status >= 500 or exc.status == 429
    return True


class IconifyClient:
    """
    Fetches single SVG icons from the Iconify API, one request at a time.

    Features:
    - A shared session with a long, fixed total timeout
    - Retry with exponential backoff for transient errors
    - Circuit breaker that fails fast once the API looks unreachable
    """

    def __init__(
        self,
        timeout: int = 300,
        connect_timeout: int = 30,
        max_attempts: int = 1,
        base_delay: float = 1.5,
        failure_threshold: int = 5,
    ):
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self.max_attempts = max_attempts
        self.base_delay = base_delay

        self._session: Optional[aiohttp.ClientSession] = None
        self._circuit_breaker = CircuitBreaker(
            failure_threshold=failure_threshold, recovery_timeout=60,
            is_outage=is_outage,
        )

    async def __aenter__(self) -> "IconifyClient":
        await self._initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": USER_AGENT},
                timeout=aiohttp.ClientTimeout(
                    total=self.timeout, sock_connect=self.connect_timeout
                ),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            log.debug("Icon API session closed.")

    async def _fetch_once(self, url: str) -> bytes:
        async with self._session.get(url, allow_redirects=True) as response:
            response.raise_for_status()
            body = await response.read()
        if not body:
            raise EmptyResponseBodyError(f"Empty response body for {url}")
        log.debug(f"Received {len(body)} bytes from {url}")
        return body

    async def fetch(self, url: str) -> bytes:
        """
        Downloads an icon and returns its raw bytes.

        Raises:
            EmptyResponseBodyError: If the API answered with no content.
            FetchFailedError: On network errors, timeouts, non-2xx statuses, or
            when the circuit breaker is open.
        """
        await self._initialize_session()

        last_exception: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                async with self._circuit_breaker:
                    return await self._fetch_once(url)
            except CircuitBreakerError as e:
                raise FetchFailedError(str(e)) from e
            except aiohttp.ClientResponseError as e:
                last_exception = e
                # Unknown icon or bad prefix, will not fix itself
                if not is_outage(e):
                    break
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e

            log.debug(
                f"Fetch attempt {attempt}/{self.max_attempts} for {url} failed: "
                f"{last_exception!r}"
            )
            if attempt < self.max_attempts:
                await asyncio.sleep(self.base_delay * (2 ** (attempt - 1)))

        raise FetchFailedError(
            f"Could not download {url}: {last_exception or 'unknown error'}"
        ) from last_exception

    async def check_connectivity(self, api_base: str = DEFAULT_API_BASE) -> bool:
        """Downloads a well-known icon to check that the API is reachable."""
        try:
            await self.fetch(build_icon_url(CONNECTIVITY_ICON, api_base))
            return True
        except FetchFailedError as e:
            log.debug(f"Connectivity check failed: {e}")
            return False
