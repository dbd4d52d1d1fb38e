# ABOUTME: Publishes the extremes artifact to a wiki page through the MediaWiki action API
# ABOUTME: Performs the login-token, login, csrf-token, edit handshake on one cookie session

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import SecretStr

from arcwiki_extremes.utils.logging import get_logger, log_api_call

# MediaWiki hands this csrf token to sessions that are not logged in
ANONYMOUS_CSRF_TOKEN = "+\\"


class PublishError(Exception):
    """Raised when publishing cannot be attempted or the API is unreachable."""


class WikiPublisher:
    """Submit the final artifact as the content of a single wiki page."""

    def __init__(
        self,
        api_url: str,
        username: str,
        password: str | SecretStr,
        client: httpx.AsyncClient | None = None,
        user_agent: str = "arcwiki-extremes/0.1",
        timeout: float = 30.0,
    ):
        self.api_url = api_url
        self.username = username
        self._password = password if isinstance(password, SecretStr) else SecretStr(password)
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(headers={"User-Agent": user_agent}, timeout=timeout)
        self.logger = get_logger(__name__)

    async def publish(self, artifact_json: str, title: str, summary: str = "Update note count extremes") -> bool:
        """Replace the page text with ``artifact_json``.

        Returns:
            True when the wiki reports the edit as successful (including a
            no-change edit), False when login or the edit is rejected

        Raises:
            PublishError: If credentials are missing or the API cannot be reached
        """
        password = self._password.get_secret_value()
        if not self.username or not password:
            raise PublishError("Wiki credentials are not configured")

        try:
            if not await self._login(password):
                return False

            csrf_token = await self._fetch_token("csrf")
            if not csrf_token or csrf_token == ANONYMOUS_CSRF_TOKEN:
                self.logger.error("No edit token after login", username=self.username)
                return False

            response = await self._post(
                {
                    "action": "edit",
                    "title": title,
                    "text": artifact_json,
                    "summary": summary,
                    "contentmodel": "json",
                    "bot": "1",
                    "token": csrf_token,
                }
            )
        except httpx.HTTPError as e:
            raise PublishError(f"Publishing to {title!r} failed: {e}") from e

        edit = response.get("edit") or {}
        if edit.get("result") != "Success":
            self.logger.error("Edit rejected", title=title, error=response.get("error"), edit=edit)
            return False

        self.logger.info(
            "Published artifact",
            title=title,
            revision=edit.get("newrevid"),
            unchanged="nochange" in edit,
        )
        return True

    async def _login(self, password: str) -> bool:
        login_token = await self._fetch_token("login")
        if not login_token:
            self.logger.error("Wiki did not issue a login token")
            return False

        response = await self._post(
            {"action": "login", "lgname": self.username, "lgpassword": password, "lgtoken": login_token}
        )
        login = response.get("login") or {}
        if login.get("result") != "Success":
            self.logger.error("Wiki login failed", username=self.username, reason=login.get("reason"))
            return False

        self.logger.info("Logged in to wiki", username=login.get("lgusername", self.username))
        return True

    async def _fetch_token(self, kind: str) -> str | None:
        data = await self._get({"action": "query", "meta": "tokens", "type": kind})
        return ((data.get("query") or {}).get("tokens") or {}).get(f"{kind}token")

    @log_api_call("mediawiki")
    async def _get(self, params: Mapping[str, str]) -> dict[str, Any]:
        response = await self.http_client.get(self.api_url, params={**params, "format": "json"})
        response.raise_for_status()
        return response.json()

    @log_api_call("mediawiki")
    async def _post(self, data: Mapping[str, str]) -> dict[str, Any]:
        response = await self.http_client.post(self.api_url, data={**data, "format": "json"})
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()
