from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Grade(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    MORE_DETAILS_NEEDED = "more_details_needed"
    MISSING = "missing"


class ReviewEvent(str, Enum):
    APPROVE = "APPROVE"
    REQUEST_CHANGES = "REQUEST_CHANGES"
    COMMENT = "COMMENT"


class RepositoryIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class GradingRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    repo_url: str
    token: str = Field(..., repr=False)
    pr_number: int
    repository: RepositoryIdentity


class AllowList(BaseModel):
    """Owner and repository names permitted to use the grader.

    The two sets are checked independently of each other.
    """

    model_config = ConfigDict(frozen=True)

    owners: frozenset[str] = frozenset()
    repos: frozenset[str] = frozenset()

    def permits_owner(self, owner: str) -> bool:
        return owner in self.owners

    def permits_repo(self, repo: str) -> bool:
        return repo in self.repos


class GradedQuestion(BaseModel):
    # wire names come from the grading schema: {"q": ..., "g": ...}
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    question: str = Field(..., alias="q")
    grade: Grade = Field(..., alias="g")


class GradingResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    questions: List[GradedQuestion] = Field(..., alias="Qs")

    @property
    def all_correct(self) -> bool:
        return all(q.grade is Grade.CORRECT for q in self.questions)


class ReviewDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ReviewEvent
    message: str


class PullRequestReviewRequest(BaseModel):
    body: str
    event: ReviewEvent


class Rubric(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    version: int = Field(..., ge=1)
    prompt: str = Field(..., min_length=1)
