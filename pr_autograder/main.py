import logging
from functools import partial
from typing import Callable, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from pr_autograder.config import Settings, load_rubric, load_settings
from pr_autograder.deps import get_allow_list, get_orchestrator_factory
from pr_autograder.errors import AutograderError
from pr_autograder.gemini_service import GeminiGrader
from pr_autograder.models import AllowList, ReviewDecision
from pr_autograder.orchestrator import ReviewOrchestrator
from pr_autograder.providers.base import SourceControlProvider
from pr_autograder.providers.github import GitHubProvider
from pr_autograder.validation import validate_request

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


async def autograder_error_handler(request: Request, exc: AutograderError):
    if exc.status_code >= 500:
        logger.error("Request to %s failed: %s", request.url.path, exc.message, exc_info=exc.__cause__)
    return PlainTextResponse(exc.detail, status_code=exc.status_code)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


def create_app(
    settings: Optional[Settings] = None,
    grader: Optional[GeminiGrader] = None,
    provider_factory: Optional[Callable[[str], SourceControlProvider]] = None,
) -> FastAPI:
    """
    Build the webhook application.

    Settings, rubric and grader are created once here and shared read-only
    by every request. ``grader`` and ``provider_factory`` can be swapped out,
    e.g. in tests.
    """
    settings = settings or load_settings()

    app = FastAPI(title="PR Autograder")
    app.state.settings = settings
    app.state.allow_list = settings.allow_list
    app.state.rubric = load_rubric(settings.rubric_file)
    app.state.grader = grader or GeminiGrader(settings.gemini_api_key, settings.gemini_model)
    app.state.provider_factory = provider_factory or partial(
        GitHubProvider, api_url=settings.github_api_url
    )

    app.add_exception_handler(AutograderError, autograder_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/checkrepo", response_model=ReviewDecision)
    async def check_repo(
        repo: Optional[str] = None,
        token: Optional[str] = None,
        pr: Optional[str] = None,
        allow_list: AllowList = Depends(get_allow_list),
        build_orchestrator: Callable[[str], ReviewOrchestrator] = Depends(get_orchestrator_factory),
    ):
        grading_request = validate_request(repo, token, pr, allow_list)
        orchestrator = build_orchestrator(grading_request.token)
        return await orchestrator.run(grading_request)

    @app.get("/healthz")
    async def health_check():
        return {"status": "ok"}

    # mounted last so the API routes above take precedence
    if settings.static_dir is not None:
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app
