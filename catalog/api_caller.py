# catalog/api_caller.py
"""
Async API caller: one time-bounded attempt per request, failures become "no data".
"""

import asyncio
import json
import logging
from typing import Dict, Optional, Any

import aiohttp

from .config import Settings
from .errors import SourceUnavailable


class APICaller:
    """
    Thin wrapper around an aiohttp session shared by every fetcher.

    A timeout, connection error, non-2xx status, or unparseable body is logged as
    SourceUnavailable and reported as None, so one failing source never aborts
    requests to the others. There is no retry.
    """

    def __init__(self, settings: Optional[Settings] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        self.settings = settings or Settings()
        self.session = session
        self._owns_session = session is None
        self.logger = logging.getLogger(self.__class__.__name__)

    async def __aenter__(self):
        """Async context manager entry"""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.timeout),
                connector=aiohttp.TCPConnector(limit=self.settings.connection_limit),
                headers={"User-Agent": self.settings.user_agent},
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        if self.session and self._owns_session:
            await self.session.close()
            self.session = None

    async def get_json(self, source: str, url: str, params: Optional[Dict] = None,
                       headers: Optional[Dict] = None) -> Optional[Any]:
        """
        GET a JSON document.

        Returns:
            Decoded JSON, or None if the source is unavailable
        """
        body = await self._get(source, url, params, headers)
        if body is None:
            return None

        try:
            return json.loads(body)
        except ValueError:
            self._report(SourceUnavailable(source, f"invalid JSON from {url}"))
            return None

    async def get_text(self, source: str, url: str, params: Optional[Dict] = None,
                       headers: Optional[Dict] = None) -> Optional[str]:
        """GET a text document, or None if the source is unavailable"""
        return await self._get(source, url, params, headers)

    async def _get(self, source: str, url: str, params: Optional[Dict],
                   headers: Optional[Dict]) -> Optional[str]:
        if self.session is None:
            raise RuntimeError("APICaller must be used as an async context manager")

        try:
            async with self.session.get(url, params=params, headers=headers) as response:
                if 200 <= response.status < 300:
                    return await response.text()

                self._report(SourceUnavailable(source, f"HTTP error for {url}", response.status))
                return None

        except asyncio.TimeoutError:
            self._report(SourceUnavailable(source, f"timeout for {url}"))
            return None

        except aiohttp.ClientError as e:
            self._report(SourceUnavailable(source, f"request failed for {url}: {e}"))
            return None

    def _report(self, error: SourceUnavailable) -> None:
        self.logger.warning(f"Source unavailable - {error}")
