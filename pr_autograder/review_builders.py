from pr_autograder.models import (
    GradingResult,
    PullRequestReviewRequest,
    ReviewDecision,
    ReviewEvent,
)


def build_grades_table(result: GradingResult) -> str:
    """Markdown table of grades, rows in the order the grader returned them."""
    lines = [
        "| Question | Grade |\n",
        "| --- | --- |\n",
    ]
    for item in result.questions:
        lines.append(f"| {item.question} | {item.grade.value} |\n")
    return "".join(lines)


def decide_review(result: GradingResult) -> ReviewDecision:
    # approve only when every answer is correct
    status = ReviewEvent.APPROVE if result.all_correct else ReviewEvent.REQUEST_CHANGES
    return ReviewDecision(status=status, message=build_grades_table(result))


def file_error_decision(path: str) -> ReviewDecision:
    return ReviewDecision(
        status=ReviewEvent.REQUEST_CHANGES,
        message=f"Error retrieving {path} file.",
    )


def build_review_request(decision: ReviewDecision, banner: str) -> PullRequestReviewRequest:
    return PullRequestReviewRequest(
        body=f"{banner}\n{decision.message}",
        event=decision.status,
    )
