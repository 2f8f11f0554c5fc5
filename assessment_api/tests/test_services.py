"""
Tests for the assessment content services.

These tests run the validation and orchestration layer against a real
SQLite database to check the business rules and the cascade behaviour:
- Assessment creation, type normalization and the placeholder passage
- Case-insensitive uniqueness of assessment names and question text
- Question/option cardinality and the correct-answer flag
- Passage authoring and the duplicate passage guard
- Cascading deletes
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from assessment_api.assessments.models import (
    DEFAULT_PASSAGE_TEXT, DEFAULT_PASSAGE_TITLE, Option, Passage, Question
)
from assessment_api.assessments.services import (
    AssessmentService, PassageService, QuestionService
)
from assessment_api.common.exceptions import ConflictError, NotFoundError, ValidationError

OPTIONS = ["A", "B", "C", "D"]


async def count_rows(session, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


class TestAssessmentService:
    """Tests for creating, reading, listing and deleting assessments"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_type", ["reading", "READING", "ReAdInG"])
    async def test_reading_type_is_normalized_and_gets_placeholder_passage(self, db_session, raw_type):
        service = AssessmentService(db_session)
        await service.create_assessment("Unit 1", raw_type)

        assessment = await service.get_assessment("Unit 1")
        assert assessment.type == "Reading"
        assert assessment.passage is not None
        assert assessment.passage.title == DEFAULT_PASSAGE_TITLE
        assert assessment.passage.text == DEFAULT_PASSAGE_TEXT
        assert assessment.passage.assessment_id == assessment.id

    @pytest.mark.asyncio
    async def test_writing_assessment_has_no_passage(self, db_session):
        service = AssessmentService(db_session)
        await service.create_assessment("Essay", "wRiTiNg")

        assessment = await service.get_assessment("essay")
        assert assessment.type == "Writing"
        assert assessment.passage is None
        assert await count_rows(db_session, Passage) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_type", ["Listening", "", None, "Readings"])
    async def test_invalid_type_is_rejected(self, db_session, raw_type):
        service = AssessmentService(db_session)
        with pytest.raises(ValidationError) as excinfo:
            await service.create_assessment("Unit 1", raw_type)
        assert "is not valid" in excinfo.value.message

    @pytest.mark.asyncio
    async def test_empty_name_is_rejected(self, db_session):
        service = AssessmentService(db_session)
        with pytest.raises(ValidationError):
            await service.create_assessment("", "Reading")

    @pytest.mark.asyncio
    async def test_duplicate_name_is_a_conflict_regardless_of_case(self, db_session):
        service = AssessmentService(db_session)
        await service.create_assessment("Midterm", "Reading")

        with pytest.raises(ConflictError) as excinfo:
            await service.create_assessment("MIDTERM", "Writing")
        assert "already exists" in excinfo.value.message

        names = await service.list_assessment_names(0) + await service.list_assessment_names(1)
        assert names == ["Midterm"]

    @pytest.mark.asyncio
    async def test_non_ascii_names_match_regardless_of_case(self, db_session):
        service = AssessmentService(db_session)
        await service.create_assessment("Écrit 1", "Writing")

        for spelling in ["Écrit 1", "écrit 1", "ÉCRIT 1"]:
            assert (await service.get_assessment(spelling)).name == "Écrit 1"

        with pytest.raises(ConflictError):
            await service.create_assessment("écrit 1", "Writing")
        assert await service.list_assessment_names(1) == ["Écrit 1"]

        await service.delete_assessment("ÉCRIT 1")
        assert await service.list_assessment_names(1) == []

    @pytest.mark.asyncio
    async def test_duplicate_rejected_by_storage_is_a_conflict(self, db_session):
        service = AssessmentService(db_session)
        await service.create_assessment("Midterm", "Reading")

        # Simulate a concurrent create that slipped past the lookup
        async def no_match(name, with_content=False):
            return None

        racing = AssessmentService(db_session)
        racing.repository.get_by_name = no_match
        with pytest.raises(ConflictError) as excinfo:
            await racing.create_assessment("midterm", "Reading")
        assert isinstance(excinfo.value.original_exception, IntegrityError)

        assert await service.list_assessment_names(0) == ["Midterm"]
        assert await count_rows(db_session, Passage) == 1

    @pytest.mark.asyncio
    async def test_get_unknown_assessment_raises_not_found(self, db_session):
        service = AssessmentService(db_session)
        with pytest.raises(NotFoundError) as excinfo:
            await service.get_assessment("missing")
        assert excinfo.value.identifier == "missing"

    @pytest.mark.asyncio
    async def test_list_returns_names_of_type_in_storage_order(self, db_session):
        service = AssessmentService(db_session)
        await service.create_assessment("R1", "Reading")
        await service.create_assessment("W1", "Writing")
        await service.create_assessment("R2", "reading")
        await service.create_assessment("W2", "writing")
        await service.create_assessment("R3", "READING")

        assert await service.list_assessment_names(0) == ["R1", "R2", "R3"]
        assert await service.list_assessment_names(1) == ["W1", "W2"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("type_code", [-1, 2, 99])
    async def test_list_rejects_unknown_type_code(self, db_session, type_code):
        service = AssessmentService(db_session)
        with pytest.raises(ValidationError):
            await service.list_assessment_names(type_code)

    @pytest.mark.asyncio
    async def test_delete_cascades_to_questions_options_and_passage(self, db_session):
        assessments = AssessmentService(db_session)
        questions = QuestionService(db_session)
        await assessments.create_assessment("Final", "Reading")
        await questions.create_question("Final", "Q1", OPTIONS, 0)
        await questions.create_question("Final", "Q2", OPTIONS, 3)

        await assessments.delete_assessment("final")

        with pytest.raises(NotFoundError):
            await assessments.get_assessment("Final")
        assert await count_rows(db_session, Question) == 0
        assert await count_rows(db_session, Option) == 0
        assert await count_rows(db_session, Passage) == 0

    @pytest.mark.asyncio
    async def test_delete_leaves_other_assessments_untouched(self, db_session):
        assessments = AssessmentService(db_session)
        questions = QuestionService(db_session)
        await assessments.create_assessment("Keep", "Reading")
        await assessments.create_assessment("Drop", "Reading")
        await questions.create_question("Keep", "Q1", OPTIONS, 1)
        await questions.create_question("Drop", "Q1", OPTIONS, 1)

        await assessments.delete_assessment("Drop")

        kept = await assessments.get_assessment("Keep")
        assert [q.text for q in kept.questions] == ["Q1"]
        assert kept.passage is not None
        assert await count_rows(db_session, Option) == 4

    @pytest.mark.asyncio
    async def test_delete_unknown_assessment_is_a_validation_error(self, db_session):
        service = AssessmentService(db_session)
        with pytest.raises(ValidationError) as excinfo:
            await service.delete_assessment("ghost")
        assert "There is no assessment named 'ghost'" in excinfo.value.message


class TestQuestionService:
    """Tests for creating and deleting questions"""

    @pytest.mark.asyncio
    async def test_option_at_answer_index_is_the_only_correct_one(self, db_session):
        await AssessmentService(db_session).create_assessment("Quiz", "Writing")
        question = await QuestionService(db_session).create_question("quiz", "Pick C", OPTIONS, 2)

        assessment = await AssessmentService(db_session).get_assessment("Quiz")
        stored = assessment.questions[0]
        assert stored.id == question.id
        assert [option.text for option in stored.options] == OPTIONS
        assert [option.is_correct for option in stored.options] == [False, False, True, False]
        assert all(option.question_id == stored.id for option in stored.options)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("options", [None, [], ["A"], ["A", "B", "C"], ["A", "B", "C", "D", "E"]])
    async def test_wrong_option_count_is_rejected(self, db_session, options):
        await AssessmentService(db_session).create_assessment("Quiz", "Reading")
        with pytest.raises(ValidationError) as excinfo:
            await QuestionService(db_session).create_question("Quiz", "Q", options, 0)
        assert "exactly 4 options" in excinfo.value.message
        assert await count_rows(db_session, Question) == 0

    @pytest.mark.asyncio
    async def test_wrong_option_count_is_rejected_even_for_unknown_assessment(self, db_session):
        with pytest.raises(ValidationError) as excinfo:
            await QuestionService(db_session).create_question("Nowhere", "Q", ["A", "B"], 9)
        assert "exactly 4 options" in excinfo.value.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("answer_index", [-1, 4, 10, None])
    async def test_answer_index_out_of_range_is_rejected(self, db_session, answer_index):
        await AssessmentService(db_session).create_assessment("Quiz", "Reading")
        with pytest.raises(ValidationError) as excinfo:
            await QuestionService(db_session).create_question("Quiz", "Q", OPTIONS, answer_index)
        assert "[0, 3]" in excinfo.value.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("assessment_name,text", [(None, "Q"), ("", "Q"), ("Quiz", None), ("Quiz", "")])
    async def test_empty_fields_are_rejected(self, db_session, assessment_name, text):
        with pytest.raises(ValidationError):
            await QuestionService(db_session).create_question(assessment_name, text, OPTIONS, 0)

    @pytest.mark.asyncio
    async def test_unknown_assessment_is_rejected(self, db_session):
        with pytest.raises(ValidationError) as excinfo:
            await QuestionService(db_session).create_question("Nowhere", "Q", OPTIONS, 0)
        assert "There is no assessment named 'Nowhere'" in excinfo.value.message

    @pytest.mark.asyncio
    async def test_duplicate_text_within_assessment_is_a_conflict(self, db_session):
        await AssessmentService(db_session).create_assessment("Quiz", "Reading")
        service = QuestionService(db_session)
        await service.create_question("Quiz", "What is the main idea?", OPTIONS, 0)

        with pytest.raises(ConflictError):
            await service.create_question("QUIZ", "WHAT IS THE MAIN IDEA?", OPTIONS, 1)
        assert await count_rows(db_session, Question) == 1
        assert await count_rows(db_session, Option) == 4

    @pytest.mark.asyncio
    async def test_non_ascii_question_text_is_unique_regardless_of_case(self, db_session):
        await AssessmentService(db_session).create_assessment("Quiz", "Reading")
        service = QuestionService(db_session)
        await service.create_question("Quiz", "Ōkawa?", OPTIONS, 0)

        with pytest.raises(ConflictError):
            await service.create_question("Quiz", "ōkawa?", OPTIONS, 1)

        await service.delete_question("Quiz", "ŌKAWA?")
        assert await count_rows(db_session, Question) == 0

    @pytest.mark.asyncio
    async def test_same_text_is_allowed_in_different_assessments(self, db_session):
        assessments = AssessmentService(db_session)
        await assessments.create_assessment("Quiz 1", "Reading")
        await assessments.create_assessment("Quiz 2", "Writing")
        service = QuestionService(db_session)

        await service.create_question("Quiz 1", "Same question", OPTIONS, 0)
        await service.create_question("Quiz 2", "Same question", OPTIONS, 0)

        assert await count_rows(db_session, Question) == 2

    @pytest.mark.asyncio
    async def test_delete_question_removes_its_options(self, db_session):
        await AssessmentService(db_session).create_assessment("Quiz", "Reading")
        service = QuestionService(db_session)
        await service.create_question("Quiz", "First", OPTIONS, 0)
        await service.create_question("Quiz", "Second", OPTIONS, 1)

        await service.delete_question("quiz", "FIRST")

        assessment = await AssessmentService(db_session).get_assessment("Quiz")
        assert [q.text for q in assessment.questions] == ["Second"]
        assert await count_rows(db_session, Option) == 4

    @pytest.mark.asyncio
    async def test_delete_unknown_question_is_rejected(self, db_session):
        await AssessmentService(db_session).create_assessment("Quiz", "Reading")
        with pytest.raises(ValidationError) as excinfo:
            await QuestionService(db_session).delete_question("Quiz", "Missing")
        assert "no question" in excinfo.value.message

    @pytest.mark.asyncio
    async def test_delete_question_of_unknown_assessment_is_rejected(self, db_session):
        with pytest.raises(ValidationError) as excinfo:
            await QuestionService(db_session).delete_question("Nowhere", "Q")
        assert "There is no assessment named" in excinfo.value.message

    @pytest.mark.asyncio
    async def test_delete_question_requires_both_fields(self, db_session):
        with pytest.raises(ValidationError):
            await QuestionService(db_session).delete_question("Quiz", "")


class TestPassageService:
    """Tests for authoring passages"""

    @pytest.mark.asyncio
    async def test_placeholder_passage_is_replaced(self, db_session):
        await AssessmentService(db_session).create_assessment("Story", "Reading")
        await PassageService(db_session).create_passage("story", "The Fox", "Once upon a time")

        assessment = await AssessmentService(db_session).get_assessment("Story")
        assert assessment.passage.title == "The Fox"
        assert assessment.passage.text == "Once upon a time"
        assert await count_rows(db_session, Passage) == 1

    @pytest.mark.asyncio
    async def test_authored_passage_is_not_overwritten(self, db_session):
        await AssessmentService(db_session).create_assessment("Story", "Reading")
        service = PassageService(db_session)
        await service.create_passage("Story", "The Fox", "Once upon a time")

        with pytest.raises(ConflictError):
            await service.create_passage("Story", "Another", "Different text")

        assessment = await AssessmentService(db_session).get_assessment("Story")
        assert assessment.passage.title == "The Fox"
        assert await count_rows(db_session, Passage) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title,text", [("T", "X"), ("", ""), (None, None)])
    async def test_writing_assessment_never_gets_a_passage(self, db_session, title, text):
        await AssessmentService(db_session).create_assessment("Essay", "Writing")
        with pytest.raises(ValidationError):
            await PassageService(db_session).create_passage("Essay", title, text)
        assert await count_rows(db_session, Passage) == 0

    @pytest.mark.asyncio
    async def test_unknown_assessment_is_rejected(self, db_session):
        with pytest.raises(ValidationError) as excinfo:
            await PassageService(db_session).create_passage("Nowhere", "T", "X")
        assert "There is no assessment named 'Nowhere'" in excinfo.value.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title,text", [("", "X"), ("T", ""), (None, "X"), ("T", None)])
    async def test_empty_fields_are_rejected(self, db_session, title, text):
        await AssessmentService(db_session).create_assessment("Story", "Reading")
        with pytest.raises(ValidationError):
            await PassageService(db_session).create_passage("Story", title, text)
