"""
Client for publishing releases through the GitHub REST API.

Only one call is needed: ``POST /repos/{user}/{repo}/releases``. A
``201`` response means the release was created, ``422`` means a release
for the tag already exists (reported as :class:`ReleaseExistsError` so
that callers can treat reruns differently) and anything else is a
:class:`ReleaseError`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict

import requests


logger = logging.getLogger(__name__)
# Attach a null handler to avoid errors when the root logger is missing a
# stream. Messages will still propagate to the root logger if configured.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0


class ReleaseError(Exception):
    """Raised when a release cannot be published."""

    pass


class ReleaseExistsError(ReleaseError):
    """Raised when the release for a tag has already been published."""

    pass


@dataclass
class ReleaseRequest:
    """Fields sent to the releases endpoint.

    Parameters
    ----------
    tag_name : str
        Tag the release is attached to.
    body : str
        Rendered changelog.
    name : str, optional
        Release title. Defaults to the tag name.
    target_commitish : str, optional
        Commit the tag is created from if it does not exist yet.
    draft : bool, optional
        Create an unpublished draft release.
    prerelease : bool, optional
        Mark the release as a pre-release.
    """

    tag_name: str
    body: str
    name: str = ""
    target_commitish: str = ""
    draft: bool = False
    prerelease: bool = False

    def to_payload(self) -> Dict[str, Any]:
        payload = asdict(self)
        if not payload["name"]:
            payload["name"] = self.tag_name
        if not payload["target_commitish"]:
            del payload["target_commitish"]
        return payload


class ReleaseClient:
    """Publish releases for a GitHub repository.

    Parameters
    ----------
    token : str
        API token sent as a bearer token.
    api_url : str, optional
        Base URL of the API, override for GitHub Enterprise Server.
    request_timeout : float, optional
        Timeout in seconds for HTTP requests.
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        request_timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._token = token
        self.api_url = api_url.rstrip("/")
        self.request_timeout = request_timeout

    def __repr__(self) -> str:
        return f"ReleaseClient(api_url={self.api_url!r})"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
        }

    def release_url(self, user: str, repo: str) -> str:
        return f"{self.api_url}/repos/{user}/{repo}/releases"

    def create_release(self, user: str, repo: str, request: ReleaseRequest) -> Dict[str, Any]:
        """Create a release on ``user/repo``.

        Returns
        -------
        Dict[str, Any]
            The decoded response body, empty if it is not JSON.

        Raises
        ------
        ReleaseExistsError
            If the API answers ``422``.
        ReleaseError
            On connection failures or any other non-``201`` answer.
        """
        url = self.release_url(user, repo)
        payload = request.to_payload()
        logger.debug("Creating release %s at %s", request.tag_name, url)
        try:
            response = requests.post(
                url,
                json=payload,
                headers=self._headers(),
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            logger.error("Failed to reach the release API: %s", exc)
            raise ReleaseError(f"submitting to the API: {exc}") from exc

        if response.status_code == 422:
            logger.error("Release %s already exists: %s", request.tag_name, response.text)
            raise ReleaseExistsError(f"release already exists: {request.tag_name}")
        if response.status_code != 201:
            logger.error(
                "Release API returned status %s: %s", response.status_code, response.text
            )
            raise ReleaseError(f"error publishing release with code: {response.status_code}")

        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError):
            return {}
        if not isinstance(data, dict):
            return {}
        logger.debug("Release %s created: %s", request.tag_name, data.get("html_url", ""))
        return data
