import base64
import binascii
import logging
from typing import Optional

import httpx

from pr_autograder.errors import (
    FileRetrievalError,
    MissingHeadBranchError,
    ReviewSubmissionError,
    UpstreamLookupError,
)
from pr_autograder.models import PullRequestReviewRequest, RepositoryIdentity
from pr_autograder.providers.base import SourceControlProvider

logger = logging.getLogger(__name__)


class GitHubProvider(SourceControlProvider):
    API = "https://api.github.com"

    def __init__(
        self,
        token: str,
        api_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = (api_url or self.API).rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
        }
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.api_url,
            headers=self.headers,
            transport=self._transport,
        )

    async def get_repository(self, repository):
        url = f"/repos/{repository.owner}/{repository.name}"
        try:
            async with self._client() as client:
                r = await client.get(url)
                r.raise_for_status()
                return r.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("GitHub repo lookup failed for %s: %s", repository.full_name, e)
            raise UpstreamLookupError("error retrieving repo from github api") from e

    async def get_pull_request_head(self, repository, number):
        url = f"/repos/{repository.owner}/{repository.name}/pulls/{number}"
        try:
            async with self._client() as client:
                r = await client.get(url)
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("GitHub PR lookup failed for %s#%d: %s", repository.full_name, number, e)
            raise UpstreamLookupError("error retrieving pr from github api") from e

        head = data.get("head") or {}
        ref = head.get("ref") if isinstance(head, dict) else None
        if not ref:
            raise MissingHeadBranchError("Error getting head branch from pull request")
        return ref

    async def get_file_content(self, repository, path, ref):
        url = f"/repos/{repository.owner}/{repository.name}/contents/{path.lstrip('/')}"
        try:
            async with self._client() as client:
                r = await client.get(url, params={"ref": ref})
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise FileRetrievalError(f"error retrieving {path}: {e}") from e

        # a directory path answers with a listing instead of a file object
        if not isinstance(data, dict) or data.get("type", "file") != "file":
            raise FileRetrievalError(f"{path} is not a file")

        return decode_content(data, path)

    async def create_review(self, repository, number, review: PullRequestReviewRequest):
        url = f"/repos/{repository.owner}/{repository.name}/pulls/{number}/reviews"
        payload = review.model_dump(mode="json", exclude_none=True)
        try:
            async with self._client() as client:
                r = await client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise ReviewSubmissionError(f"GitHub API error: {e}") from e

        if not r.is_success:
            raise ReviewSubmissionError(f"GitHub API error: {r.text}")


def decode_content(data: dict, path: str) -> str:
    """Decode a contents-API file object the way GitHub encodes it."""
    encoding = data.get("encoding") or ""
    content = data.get("content")
    if content is None:
        raise FileRetrievalError(f"{path} has no content")

    if encoding == "base64":
        try:
            raw = base64.b64decode(content)
        except binascii.Error as e:
            raise FileRetrievalError(f"failed to decode {path}: {e}") from e
        # stray non-UTF-8 bytes in a student's README still get graded
        return raw.decode("utf-8", errors="replace")
    if encoding == "":
        return content

    raise FileRetrievalError(f"unsupported encoding type {encoding!r} for {path}")
