"""
Transfer objects for the assessment API.

Request models keep every field optional so that missing values reach the
service layer and are reported with the same messages as empty ones.
Response models are read from ORM rows and serialized with camelCase names.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class TransferModel(BaseModel):
    """Base model accepting both field names and camelCase aliases."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# Request Models
class AssessmentCreate(TransferModel):
    name: Optional[str] = Field(None, description="Unique assessment name")
    type: Optional[str] = Field(None, description="'Reading' or 'Writing' (case insensitive)")


class QuestionCreate(TransferModel):
    assessment_name: Optional[str] = Field(None, alias="assessmentName")
    text: Optional[str] = Field(None, description="Question text, unique within the assessment")
    options: Optional[List[str]] = Field(None, description="Exactly four answer options")
    answer_index: Optional[int] = Field(0, alias="answerIndex", description="Index of the correct option")


class QuestionDelete(TransferModel):
    assessment_name: Optional[str] = Field(None, alias="assessmentName")
    text: Optional[str] = None


class PassageCreate(TransferModel):
    assessment_name: Optional[str] = Field(None, alias="assessmentName")
    title: Optional[str] = None
    text: Optional[str] = None


# Response Models
class OptionRead(TransferModel):
    id: int
    text: str
    is_correct: bool = Field(alias="isCorrect")
    question_id: int = Field(alias="questionId")


class QuestionRead(TransferModel):
    id: int
    text: str
    assessment_id: int = Field(alias="assessmentId")
    options: List[OptionRead] = Field(default_factory=list)


class PassageRead(TransferModel):
    id: int
    title: str
    text: str
    assessment_id: int = Field(alias="assessmentId")


class AssessmentRead(TransferModel):
    id: int
    type: str
    name: str
    questions: List[QuestionRead] = Field(default_factory=list)
    passage: Optional[PassageRead] = None
