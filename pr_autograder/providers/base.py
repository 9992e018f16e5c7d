from pr_autograder.models import PullRequestReviewRequest, RepositoryIdentity


class SourceControlProvider:
    """Operations the review orchestrator needs from a source-control host."""

    async def get_repository(self, repository: RepositoryIdentity) -> dict:
        raise NotImplementedError

    async def get_pull_request_head(self, repository: RepositoryIdentity, number: int) -> str:
        raise NotImplementedError

    async def get_file_content(self, repository: RepositoryIdentity, path: str, ref: str) -> str:
        raise NotImplementedError

    async def create_review(
        self,
        repository: RepositoryIdentity,
        number: int,
        review: PullRequestReviewRequest,
    ) -> None:
        raise NotImplementedError
