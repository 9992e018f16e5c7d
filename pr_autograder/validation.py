import re
from typing import Optional
from urllib.parse import urlsplit

from pr_autograder.errors import (
    Forbidden,
    InvalidPRNumber,
    InvalidRepositoryURL,
    MissingParameter,
)
from pr_autograder.models import AllowList, GradingRequest, RepositoryIdentity

GITHUB_HOST = "github.com"

_PR_NUMBER_RE = re.compile(r"[+-]?[0-9]+")
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def parse_github_repo_url(url: str) -> RepositoryIdentity:
    """
    Extract owner and repository name from a GitHub repository URL.

    Accepts ``http(s)://github.com/{owner}/{repo}`` with an optional ``.git``
    suffix; anything after the repository segment is ignored.
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        raise InvalidRepositoryURL("invalid URL")

    if not parts.scheme or not parts.netloc:
        raise InvalidRepositoryURL("invalid URL")

    if parts.scheme not in ("http", "https"):
        raise InvalidRepositoryURL("URL must start with http or https")

    if (hostname or "").lower() != GITHUB_HOST:
        raise InvalidRepositoryURL("URL must have github.com as the domain")

    segments = parts.path.strip("/").split("/")
    if len(segments) < 2:
        raise InvalidRepositoryURL("URL must include both username and repository name")

    owner = segments[0]
    name = segments[1].removesuffix(".git")
    if not owner or not name:
        raise InvalidRepositoryURL("URL must include both username and repository name")

    return RepositoryIdentity(owner=owner, name=name)


def validate_request(
    repo: Optional[str],
    token: Optional[str],
    pr: Optional[str],
    allow_list: AllowList,
) -> GradingRequest:
    # order matters: the first failing check is the one reported
    if not repo:
        raise MissingParameter("repo query parameter is required")
    if not token:
        raise MissingParameter("token query parameter is required")
    if not pr:
        raise MissingParameter("pr query parameter is required")

    if not _PR_NUMBER_RE.fullmatch(pr):
        raise InvalidPRNumber("pr query parameter must be an integer")
    pr_number = int(pr)
    if not INT64_MIN <= pr_number <= INT64_MAX:
        raise InvalidPRNumber("pr query parameter must be an integer")

    repository = parse_github_repo_url(repo)

    if not allow_list.permits_owner(repository.owner):
        raise Forbidden("user not allowed")
    if not allow_list.permits_repo(repository.name):
        raise Forbidden("repo not allowed")

    return GradingRequest(
        repo_url=repo,
        token=token,
        pr_number=pr_number,
        repository=repository,
    )
