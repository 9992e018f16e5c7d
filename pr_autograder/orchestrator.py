import logging

from pr_autograder.errors import FileRetrievalError
from pr_autograder.gemini_service import GeminiGrader
from pr_autograder.models import GradingRequest, ReviewDecision, Rubric
from pr_autograder.providers.base import SourceControlProvider
from pr_autograder.review_builders import (
    build_review_request,
    decide_review,
    file_error_decision,
)

logger = logging.getLogger(__name__)


class ReviewOrchestrator:
    """
    Runs one grading request end to end:
    repo lookup → PR lookup → file fetch → grading → review submission.

    Every step is awaited in turn and the first failure ends the run, except
    a failed file fetch, which is reported on the PR as a change request.
    """

    def __init__(
        self,
        provider: SourceControlProvider,
        grader: GeminiGrader,
        rubric: Rubric,
        readme_path: str = "README.md",
        review_banner: str = "### DSI Autograder",
    ):
        self.provider = provider
        self.grader = grader
        self.rubric = rubric
        self.readme_path = readme_path
        self.review_banner = review_banner

    async def run(self, request: GradingRequest) -> ReviewDecision:
        repository = request.repository
        logger.info("Grading %s PR #%d", repository.full_name, request.pr_number)

        await self.provider.get_repository(repository)
        head_ref = await self.provider.get_pull_request_head(repository, request.pr_number)

        try:
            content = await self.provider.get_file_content(repository, self.readme_path, head_ref)
        except FileRetrievalError as e:
            logger.warning("Could not read %s on %s@%s: %s", self.readme_path, repository.full_name, head_ref, e)
            decision = file_error_decision(self.readme_path)
            await self.publish(request, decision)
            return decision

        result = await self.grader.grade(self.rubric, content)
        decision = decide_review(result)
        logger.info("Decision for %s PR #%d: %s", repository.full_name, request.pr_number, decision.status.value)

        await self.publish(request, decision)
        return decision

    async def publish(self, request: GradingRequest, decision: ReviewDecision) -> None:
        review = build_review_request(decision, self.review_banner)
        await self.provider.create_review(request.repository, request.pr_number, review)
