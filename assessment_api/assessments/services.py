"""
Assessment Content Services

This module implements the validation and orchestration layer for
assessment content. Every create and delete goes through these services,
which enforce the business rules before touching storage:

1. Assessment names are unique, case-insensitively
2. Reading assessments own exactly one passage, Writing assessments none
3. Question text is unique within its assessment, case-insensitively
4. Every question is stored atomically with exactly four options
"""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from assessment_api.assessments.models import (
    OPTION_COUNT, Assessment, AssessmentType, Option, Passage, Question
)
from assessment_api.assessments.repository import AssessmentRepository
from assessment_api.common.exceptions import ConflictError, NotFoundError, ValidationError
from assessment_api.common.logger import get_logger, log_execution_time

# Set up logger
logger = get_logger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or len(value) == 0


def _missing_assessment(name: str) -> ValidationError:
    return ValidationError(f"There is no assessment named '{name}' (case insensitive).")


class BaseContentService:
    """Shared plumbing for the content services."""

    def __init__(self, session: AsyncSession):
        self.repository = AssessmentRepository(session)

    def _reject(self, error: Exception) -> Exception:
        logger.warning(f"{type(self).__name__} rejected request: {error}")
        return error


class AssessmentService(BaseContentService):
    """Create, read, list and delete assessments."""

    @log_execution_time(logger)
    async def create_assessment(self, name: Optional[str], assessment_type: Optional[str]) -> Assessment:
        """
        Create an assessment.

        The type is normalized to its capitalized form. A Reading assessment
        gets a placeholder passage in the same transaction.

        Raises:
            ValidationError: If the name is empty or the type is not Reading/Writing
            ConflictError: If an assessment with the same name exists
        """
        parsed_type = AssessmentType.parse(assessment_type)
        if parsed_type is None:
            raise self._reject(ValidationError(
                f"Assessment type '{assessment_type}' is not valid. "
                f"Expected 'Reading' or 'Writing' (case insensitive)."
            ))
        if _is_blank(name):
            raise self._reject(ValidationError("The assessment name cannot be null or empty."))

        duplicate_message = f"An assessment with name '{name}' already exists (case insensitive)."
        if await self.repository.get_by_name(name) is not None:
            raise self._reject(ConflictError(duplicate_message, "assessment", name))

        assessment = Assessment(name=name, type=parsed_type.value)
        if parsed_type is AssessmentType.READING:
            assessment.passage = Passage.placeholder()

        self.repository.add(assessment)
        try:
            await self.repository.commit()
        except IntegrityError as e:
            # Lost a race against a concurrent create of the same name
            raise self._reject(ConflictError(duplicate_message, "assessment", name, e))

        logger.info(f"Created {assessment.type} assessment '{assessment.name}' (id={assessment.id})")
        return assessment

    @log_execution_time(logger)
    async def get_assessment(self, name: str) -> Assessment:
        """
        Get an assessment with its questions, options and passage.

        Raises:
            NotFoundError: If no assessment has this name
        """
        assessment = await self.repository.get_by_name(name, with_content=True)
        if assessment is None:
            raise self._reject(NotFoundError("assessment", name))
        return assessment

    @log_execution_time(logger)
    async def list_assessment_names(self, type_code: int) -> List[str]:
        """
        List assessment names of a type.

        Args:
            type_code: 0 for Reading, 1 for Writing

        Raises:
            ValidationError: If the code is neither 0 nor 1
        """
        assessment_type = AssessmentType.from_code(type_code)
        if assessment_type is None:
            raise self._reject(ValidationError(
                "Assessment type parameter must be either 0 (reading) or 1 (writing)."
            ))
        return await self.repository.list_names(assessment_type)

    @log_execution_time(logger)
    async def delete_assessment(self, name: str) -> None:
        """
        Delete an assessment together with its questions, options and passage.

        Raises:
            ValidationError: If no assessment has this name
        """
        assessment = await self.repository.get_by_name(name, with_content=True)
        if assessment is None:
            raise self._reject(_missing_assessment(name))

        await self.repository.delete(assessment)
        await self.repository.commit()
        logger.info(f"Deleted assessment '{assessment.name}' (id={assessment.id})")


class QuestionService(BaseContentService):
    """Create and delete questions."""

    @log_execution_time(logger)
    async def create_question(
        self,
        assessment_name: Optional[str],
        text: Optional[str],
        options: Optional[List[str]],
        answer_index: Optional[int],
    ) -> Question:
        """
        Create a question and its four options in one transaction.

        The option at answer_index is the only one marked correct.

        Raises:
            ValidationError: On empty fields, a wrong option count, an answer
                index outside [0, 3] or an unknown assessment
            ConflictError: If the assessment already has a question with this text
        """
        if _is_blank(assessment_name) or _is_blank(text):
            raise self._reject(ValidationError("The provided question properties cannot be null or empty."))
        if options is None or len(options) != OPTION_COUNT:
            raise self._reject(ValidationError(f"The question must contain exactly {OPTION_COUNT} options."))
        if answer_index is None or not 0 <= answer_index < OPTION_COUNT:
            raise self._reject(ValidationError(
                f"The answer index must be within [0, {OPTION_COUNT - 1}] range."
            ))

        assessment = await self.repository.get_by_name(assessment_name)
        if assessment is None:
            raise self._reject(_missing_assessment(assessment_name))

        duplicate_message = "A question with the same text already exists (case insensitive)."
        if await self.repository.get_question(assessment.id, text) is not None:
            raise self._reject(ConflictError(duplicate_message, "question", text))

        question = Question(
            text=text,
            assessment_id=assessment.id,
            options=[
                Option(text=option_text, is_correct=index == answer_index)
                for index, option_text in enumerate(options)
            ],
        )
        self.repository.add(question)
        try:
            await self.repository.commit()
        except IntegrityError as e:
            raise self._reject(ConflictError(duplicate_message, "question", text, e))

        logger.info(f"Created question {question.id} in assessment '{assessment.name}'")
        return question

    @log_execution_time(logger)
    async def delete_question(self, assessment_name: Optional[str], text: Optional[str]) -> None:
        """
        Delete a question and its options.

        Raises:
            ValidationError: On empty fields, an unknown assessment or an unknown question
        """
        if _is_blank(assessment_name) or _is_blank(text):
            raise self._reject(ValidationError("Assessment name and question text must be provided."))

        assessment = await self.repository.get_by_name(assessment_name)
        if assessment is None:
            raise self._reject(_missing_assessment(assessment_name))

        question = await self.repository.get_question(assessment.id, text)
        if question is None:
            raise self._reject(ValidationError("There is no question with the provided text (case insensitive)."))

        await self.repository.delete(question)
        await self.repository.commit()
        logger.info(f"Deleted question {question.id} from assessment '{assessment.name}'")


class PassageService(BaseContentService):
    """Author the passage of Reading assessments."""

    @log_execution_time(logger)
    async def create_passage(
        self,
        assessment_name: Optional[str],
        title: Optional[str],
        text: Optional[str],
    ) -> Passage:
        """
        Set the passage of a Reading assessment.

        The placeholder passage created with the assessment is replaced in
        place; a passage that already holds authored content is kept.

        Raises:
            ValidationError: On empty fields, an unknown assessment or a Writing assessment
            ConflictError: If the assessment already has an authored passage
        """
        if _is_blank(assessment_name) or _is_blank(title) or _is_blank(text):
            raise self._reject(ValidationError("The provided passage properties cannot be null or empty."))

        assessment = await self.repository.get_by_name(assessment_name, with_content=True)
        if assessment is None:
            raise self._reject(_missing_assessment(assessment_name))
        if not assessment.is_reading:
            raise self._reject(ValidationError(
                f"Assessment '{assessment.name}' is a {assessment.type} assessment and cannot have a passage."
            ))

        assessment_label = assessment.name
        duplicate_message = f"Assessment '{assessment_label}' already has a passage."
        passage = assessment.passage
        if passage is None:
            passage = Passage(title=title, text=text, assessment_id=assessment.id)
            self.repository.add(passage)
        elif passage.is_placeholder:
            passage.title = title
            passage.text = text
        else:
            raise self._reject(ConflictError(duplicate_message, "passage", assessment_label))

        try:
            await self.repository.commit()
        except IntegrityError as e:
            raise self._reject(ConflictError(duplicate_message, "passage", assessment_label, e))

        logger.info(f"Stored passage {passage.id} for assessment '{assessment_label}'")
        return passage
