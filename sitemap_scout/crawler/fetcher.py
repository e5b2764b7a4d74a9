"""
Fetcher module: the only place where SitemapScout talks to the network.

One call issues one GET with a randomly rotated browser User-Agent and a fixed
per-request timeout. There is no retry and no rate limiting here; callers
bound parallelism themselves.
"""
from __future__ import annotations

import asyncio
import random
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from sitemap_scout.crawler.models import FetchedPage
from sitemap_scout.exceptions import FetchError
from sitemap_scout.logger import get_logger

__all__ = ("DEFAULT_TIMEOUT", "USER_AGENTS", "Fetcher")

DEFAULT_TIMEOUT: float = 10.0

USER_AGENTS: tuple[str, ...] = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36 Edg/119.0.0.0",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36",
)

logger = get_logger("fetcher")


class Fetcher:
    """Issues single GET requests with a rotated User-Agent and a fixed timeout."""

    def __init__(
        self,
        session: ClientSession,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agents: Sequence[str] = USER_AGENTS,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not user_agents:
            raise ValueError("user_agents must not be empty")
        self.session = session
        self.timeout = timeout
        self.user_agents = tuple(user_agents)
        self._client_timeout = ClientTimeout(total=timeout)
        self._rng = rng or random.Random()

    def pick_user_agent(self) -> str:
        """Draw one User-Agent, independently for every call."""
        return self._rng.choice(self.user_agents)

    async def fetch(self, url: str) -> FetchedPage:
        """
        GET *url* and read the whole body.

        Raises FetchError on timeout, DNS failure, refused connection or a
        malformed URL. HTTP error statuses are not errors: they are returned
        as-is in ``FetchedPage.status``.
        """
        headers = {"User-Agent": self.pick_user_agent()}
        logger.debug("GET %s", url)
        try:
            async with self.session.get(
                url, headers=headers, timeout=self._client_timeout, allow_redirects=True
            ) as resp:
                body = await resp.read()
                return FetchedPage(
                    url=str(resp.url),
                    status=resp.status,
                    body=body,
                    headers={k: v for k, v in resp.headers.items()},
                    requested_url=url,
                )
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"timed out after {self.timeout:g}s") from exc
        except (ClientError, ValueError) as exc:
            raise FetchError(url, f"{type(exc).__name__}: {exc}") from exc
