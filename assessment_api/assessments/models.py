"""
SQLAlchemy ORM models for assessment content.

This module defines the database models for:
- Assessment: a named Reading or Writing test
- Question: a test item owned by an assessment
- Option: one of the four answers of a question
- Passage: the reading text of a Reading assessment

Ownership is one-directional: parents hold their children through
relationships, children only carry the parent's id column.
"""

import enum
from typing import Optional

from sqlalchemy import (
    Column, String, Integer, Boolean, Text, ForeignKey, Index, CheckConstraint, func
)
from sqlalchemy.orm import relationship

from assessment_api.database.base import ModelBase

# Placeholder content of the passage created with every Reading assessment
DEFAULT_PASSAGE_TITLE = "Default title"
DEFAULT_PASSAGE_TEXT = "Default text..."

# Every question carries exactly this many options
OPTION_COUNT = 4


class AssessmentType(str, enum.Enum):
    """Assessment types, stored capitalized."""
    READING = "Reading"
    WRITING = "Writing"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["AssessmentType"]:
        """
        Match a type name case-insensitively.

        Returns:
            The matching type, or None if the value names no type
        """
        if value is None:
            return None
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        return None

    @classmethod
    def from_code(cls, code: int) -> Optional["AssessmentType"]:
        """Map the numeric list code (0 = Reading, 1 = Writing) to a type."""
        return {0: cls.READING, 1: cls.WRITING}.get(code)


class Assessment(ModelBase):
    """
    Model for a named assessment.

    A Reading assessment always owns exactly one passage; a Writing
    assessment never does.
    """
    __tablename__ = 'assessment'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False)

    # Relationships
    questions = relationship("Question", cascade="all, delete-orphan",
                             order_by="Question.id")
    passage = relationship("Passage", uselist=False, cascade="all, delete-orphan")

    __table_args__ = (
        Index('uq_assessment_name_lower', func.lower(name), unique=True),
        CheckConstraint("type IN ('Reading', 'Writing')", name='type'),
    )

    @property
    def is_reading(self) -> bool:
        return self.type == AssessmentType.READING.value

    def __repr__(self) -> str:
        return f"<Assessment id={self.id} name={self.name!r} type={self.type}>"


class Question(ModelBase):
    """Model for a question; text is unique per assessment, case-insensitively."""
    __tablename__ = 'question'

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    assessment_id = Column(Integer, ForeignKey('assessment.id', ondelete='CASCADE'),
                           nullable=False, index=True)

    options = relationship("Option", cascade="all, delete-orphan",
                           order_by="Option.id")

    __table_args__ = (
        Index('uq_question_assessment_text_lower', assessment_id, func.lower(text), unique=True),
    )

    def __repr__(self) -> str:
        return f"<Question id={self.id} assessment_id={self.assessment_id}>"


class Option(ModelBase):
    """Model for an answer option of a question."""
    __tablename__ = 'option'

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)
    question_id = Column(Integer, ForeignKey('question.id', ondelete='CASCADE'),
                         nullable=False, index=True)


class Passage(ModelBase):
    """Model for the reading passage of an assessment (1:1)."""
    __tablename__ = 'passage'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    text = Column(Text, nullable=False)
    assessment_id = Column(Integer, ForeignKey('assessment.id', ondelete='CASCADE'),
                           nullable=False, unique=True)

    @classmethod
    def placeholder(cls) -> "Passage":
        """Create a passage holding the default placeholder content."""
        return cls(title=DEFAULT_PASSAGE_TITLE, text=DEFAULT_PASSAGE_TEXT)

    @property
    def is_placeholder(self) -> bool:
        return self.title == DEFAULT_PASSAGE_TITLE and self.text == DEFAULT_PASSAGE_TEXT
