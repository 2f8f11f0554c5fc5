"""
Assessment Content Controller

This module exposes the assessment content operations over HTTP:

- GET    /assessment/{name}        assessment with questions, options and passage
- GET    /assessment/{type_code}   names of Reading (0) or Writing (1) assessments
- POST   /assessment               create an assessment
- DELETE /assessment/{name}        delete an assessment and everything it owns
- POST   /question                 create a question with its four options
- DELETE /question                 delete a question and its options
- POST   /passage                  author the passage of a Reading assessment

Errors raised by the services are turned into plain-text responses by the
handlers registered in assessment_api.api.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from assessment_api.assessments.schemas import (
    AssessmentCreate, AssessmentRead, PassageCreate, QuestionCreate, QuestionDelete
)
from assessment_api.assessments.services import AssessmentService, PassageService, QuestionService
from assessment_api.common.logger import get_logger
from assessment_api.database.init_db import get_async_session

# Set up logger
logger = get_logger(__name__)

# Create router
router = APIRouter()


def get_assessment_service(session: AsyncSession = Depends(get_async_session)) -> AssessmentService:
    return AssessmentService(session)


def get_question_service(session: AsyncSession = Depends(get_async_session)) -> QuestionService:
    return QuestionService(session)


def get_passage_service(session: AsyncSession = Depends(get_async_session)) -> PassageService:
    return PassageService(session)


# Assessment endpoints. The numeric route is declared first so that type
# codes are not read as assessment names.
@router.get("/assessment/{type_code:int}", response_model=List[str], tags=["assessment"])
async def list_assessments(
    type_code: int,
    service: AssessmentService = Depends(get_assessment_service),
) -> List[str]:
    """List the names of Reading (0) or Writing (1) assessments."""
    return await service.list_assessment_names(type_code)


@router.get("/assessment/{name}", response_model=AssessmentRead, tags=["assessment"])
async def get_assessment(
    name: str,
    service: AssessmentService = Depends(get_assessment_service),
) -> AssessmentRead:
    """Get an assessment by name (case insensitive) with all of its content."""
    assessment = await service.get_assessment(name)
    return AssessmentRead.model_validate(assessment)


@router.post("/assessment", status_code=status.HTTP_200_OK, tags=["assessment"])
async def create_assessment(
    payload: AssessmentCreate,
    service: AssessmentService = Depends(get_assessment_service),
) -> Response:
    """Create an assessment; Reading assessments get a placeholder passage."""
    await service.create_assessment(payload.name, payload.type)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/assessment/{name}", status_code=status.HTTP_204_NO_CONTENT, tags=["assessment"])
async def delete_assessment(
    name: str,
    service: AssessmentService = Depends(get_assessment_service),
) -> Response:
    """Delete an assessment with its questions, options and passage."""
    await service.delete_assessment(name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Question endpoints
@router.post("/question", status_code=status.HTTP_200_OK, tags=["question"])
async def create_question(
    payload: QuestionCreate,
    service: QuestionService = Depends(get_question_service),
) -> Response:
    """Create a question and its four options."""
    await service.create_question(
        payload.assessment_name, payload.text, payload.options, payload.answer_index
    )
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/question", status_code=status.HTTP_204_NO_CONTENT, tags=["question"])
async def delete_question(
    payload: QuestionDelete,
    service: QuestionService = Depends(get_question_service),
) -> Response:
    """Delete a question identified by assessment name and question text."""
    await service.delete_question(payload.assessment_name, payload.text)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Passage endpoints
@router.post("/passage", status_code=status.HTTP_200_OK, tags=["passage"])
async def create_passage(
    payload: PassageCreate,
    service: PassageService = Depends(get_passage_service),
) -> Response:
    """Author the passage of a Reading assessment."""
    await service.create_passage(payload.assessment_name, payload.title, payload.text)
    return Response(status_code=status.HTTP_200_OK)


logger.info(f"Assessment router loaded with {len(router.routes)} routes")
