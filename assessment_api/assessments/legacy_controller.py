"""
Legacy Assessment Controller

Older clients address every operation through the combined controller's
action paths (for example ``/Assessment/Assessment/Get/{name}``). This router
keeps those paths working on top of the same services as the primary
routes. Usage is recorded by LegacyAPITrackingMiddleware so the paths can be
retired once clients have migrated.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from assessment_api.assessments.controllers import (
    get_assessment_service, get_passage_service, get_question_service
)
from assessment_api.assessments.schemas import (
    AssessmentCreate, AssessmentRead, PassageCreate, QuestionCreate, QuestionDelete
)
from assessment_api.assessments.services import AssessmentService, PassageService, QuestionService

# Prefix of the combined controller, relative to the API prefix
LEGACY_PREFIX = "/Assessment"

router = APIRouter(tags=["legacy"], deprecated=True)


@router.get("/Assessment/Get/{type_code:int}", response_model=List[str])
async def legacy_list_assessments(
    type_code: int,
    service: AssessmentService = Depends(get_assessment_service),
) -> List[str]:
    return await service.list_assessment_names(type_code)


@router.get("/Assessment/Get/{name}", response_model=AssessmentRead)
async def legacy_get_assessment(
    name: str,
    service: AssessmentService = Depends(get_assessment_service),
) -> AssessmentRead:
    return AssessmentRead.model_validate(await service.get_assessment(name))


@router.post("/Assessment/Post")
async def legacy_create_assessment(
    payload: AssessmentCreate,
    service: AssessmentService = Depends(get_assessment_service),
) -> Response:
    await service.create_assessment(payload.name, payload.type)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/Question/Post")
async def legacy_create_question(
    payload: QuestionCreate,
    service: QuestionService = Depends(get_question_service),
) -> Response:
    await service.create_question(
        payload.assessment_name, payload.text, payload.options, payload.answer_index
    )
    return Response(status_code=status.HTTP_200_OK)


@router.post("/Passage/Post")
async def legacy_create_passage(
    payload: PassageCreate,
    service: PassageService = Depends(get_passage_service),
) -> Response:
    await service.create_passage(payload.assessment_name, payload.title, payload.text)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/Assessment/Delete/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def legacy_delete_assessment(
    name: str,
    service: AssessmentService = Depends(get_assessment_service),
) -> Response:
    await service.delete_assessment(name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/Question/Delete", status_code=status.HTTP_204_NO_CONTENT)
async def legacy_delete_question(
    payload: QuestionDelete,
    service: QuestionService = Depends(get_question_service),
) -> Response:
    await service.delete_question(payload.assessment_name, payload.text)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
