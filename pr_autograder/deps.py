# deps.py
from typing import Callable

from fastapi import Request

from pr_autograder.config import Settings
from pr_autograder.models import AllowList
from pr_autograder.orchestrator import ReviewOrchestrator


def get_allow_list(request: Request) -> AllowList:
    return request.app.state.allow_list


def get_orchestrator_factory(request: Request) -> Callable[[str], ReviewOrchestrator]:
    """Returns a builder that binds the caller's GitHub token to a new orchestrator."""
    state = request.app.state
    settings: Settings = state.settings

    def build(token: str) -> ReviewOrchestrator:
        return ReviewOrchestrator(
            provider=state.provider_factory(token),
            grader=state.grader,
            rubric=state.rubric,
            readme_path=settings.readme_path,
            review_banner=settings.review_banner,
        )

    return build
