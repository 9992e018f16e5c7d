"""Pytest configuration and fixtures for pr_autograder tests."""

from unittest.mock import AsyncMock

import pytest

from pr_autograder.config import DEFAULT_RUBRIC_PATH, Settings, load_rubric
from pr_autograder.models import (
    AllowList,
    Grade,
    GradedQuestion,
    GradingRequest,
    GradingResult,
    RepositoryIdentity,
)

QUESTIONS = ["a", "b", "c", "d", "e", "f", "g", "h", "h.1"]


def make_result(*grades: Grade) -> GradingResult:
    return GradingResult(
        questions=[GradedQuestion(question=q, grade=g) for q, g in zip(QUESTIONS, grades)]
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        repo_names=["hw1"],
        user_names=["acme"],
        gemini_api_key="test-key",
        static_dir=None,
    )


@pytest.fixture
def allow_list() -> AllowList:
    return AllowList(owners=frozenset({"acme"}), repos=frozenset({"hw1"}))


@pytest.fixture
def rubric():
    return load_rubric(DEFAULT_RUBRIC_PATH)


@pytest.fixture
def repository() -> RepositoryIdentity:
    return RepositoryIdentity(owner="acme", name="hw1")


@pytest.fixture
def grading_request(repository) -> GradingRequest:
    return GradingRequest(
        repo_url="https://github.com/acme/hw1",
        token="gh-token",
        pr_number=4,
        repository=repository,
    )


@pytest.fixture
def all_correct() -> GradingResult:
    return make_result(*[Grade.CORRECT] * 9)


@pytest.fixture
def one_missing() -> GradingResult:
    grades = [Grade.CORRECT] * 9
    grades[4] = Grade.MISSING
    return make_result(*grades)


@pytest.fixture
def provider():
    """Source-control provider double with a PR on branch ``feature``."""
    mock = AsyncMock()
    mock.get_repository.return_value = {"full_name": "acme/hw1"}
    mock.get_pull_request_head.return_value = "feature"
    mock.get_file_content.return_value = "# Homework\n> a. An issue is..."
    mock.create_review.return_value = None
    return mock


@pytest.fixture
def grader(all_correct):
    mock = AsyncMock()
    mock.grade.return_value = all_correct
    return mock
