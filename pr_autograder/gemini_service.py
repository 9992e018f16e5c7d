import logging
from typing import List

import google.generativeai as genai
from typing_extensions import TypedDict

from pr_autograder.errors import GradingServiceError
from pr_autograder.gemini_parser import parse_grading_result
from pr_autograder.models import Grade, GradingResult, Rubric

logger = logging.getLogger(__name__)


class GradedQuestionSchema(TypedDict):
    q: str
    g: Grade


class GradingResultSchema(TypedDict):
    Qs: List[GradedQuestionSchema]


class GeminiGrader:
    """
    Grades a submission against a rubric with Gemini structured output.

    The rubric prompt goes in as the system instruction and the submission
    as the user content; the reply must match ``GradingResultSchema``.
    """

    def __init__(self, api_key: str, model_name: str = "models/gemini-2.5-flash"):
        # the client library keeps its credentials process-wide
        genai.configure(api_key=api_key)
        self.model_name = model_name

    def _model(self, rubric: Rubric) -> genai.GenerativeModel:
        return genai.GenerativeModel(
            self.model_name,
            system_instruction=rubric.prompt,
            generation_config=genai.GenerationConfig(
                response_mime_type="application/json",
                response_schema=GradingResultSchema,
            ),
        )

    async def grade(self, rubric: Rubric, submission: str) -> GradingResult:
        model = self._model(rubric)
        try:
            response = await model.generate_content_async(submission)
            raw = response.text
        except Exception as e:
            logger.exception("Gemini grading call failed (rubric %s v%d)", rubric.name, rubric.version)
            raise GradingServiceError("error creating grading completion with Gemini API") from e

        result = parse_grading_result(raw)
        logger.info("Gemini graded %d questions", len(result.questions))
        return result
