"""
Repository Module for Assessment Content

This module provides the data access layer for assessments, questions,
options and passages. All name and text lookups are case-insensitive.
"""

from contextlib import asynccontextmanager
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assessment_api.assessments.models import Assessment, AssessmentType, Question
from assessment_api.common.exceptions import DatabaseError
from assessment_api.common.logger import get_logger

# Set up logger
logger = get_logger(__name__)


class AssessmentRepository:
    """
    Repository for assessment content using SQLAlchemy Async.

    The repository works on the session it is given; writes become durable
    only through commit(), so a caller can stage several rows and persist
    them in one transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def _query_scope(self, operation: str):
        """Translate storage failures during reads into DatabaseError."""
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(f"Database error during {operation}: {str(e)}", exc_info=True)
            raise DatabaseError(f"{operation} failed", original_exception=e)

    async def get_by_name(self, name: str, with_content: bool = False) -> Optional[Assessment]:
        """
        Find an assessment by name, ignoring case.

        Args:
            name: Assessment name
            with_content: Eagerly load questions (with options) and the passage

        Returns:
            The assessment if found, None otherwise
        """
        query = select(Assessment).where(func.lower(Assessment.name) == func.lower(name))
        if with_content:
            query = query.options(
                selectinload(Assessment.questions).selectinload(Question.options),
                selectinload(Assessment.passage),
            ).execution_options(populate_existing=True)
        async with self._query_scope("assessment lookup"):
            result = await self.session.execute(query)
            return result.scalars().first()

    async def list_names(self, assessment_type: AssessmentType) -> List[str]:
        """Return the names of all assessments of a type, in storage order."""
        query = (
            select(Assessment.name)
            .where(Assessment.type == assessment_type.value)
            .order_by(Assessment.id)
        )
        async with self._query_scope("assessment listing"):
            result = await self.session.execute(query)
            return list(result.scalars().all())

    async def get_question(self, assessment_id: int, text: str) -> Optional[Question]:
        """Find a question of an assessment by text, ignoring case."""
        query = (
            select(Question)
            .where(Question.assessment_id == assessment_id)
            .where(func.lower(Question.text) == func.lower(text))
            .options(selectinload(Question.options))
        )
        async with self._query_scope("question lookup"):
            result = await self.session.execute(query)
            return result.scalars().first()

    def add(self, entity) -> None:
        """Stage a new row (and its owned children) for the next commit."""
        self.session.add(entity)

    async def delete(self, entity) -> None:
        """Stage a row for deletion; owned children are removed with it."""
        await self.session.delete(entity)

    async def commit(self) -> None:
        """
        Commit the staged changes as one transaction.

        Raises:
            IntegrityError: If a uniqueness or foreign key constraint rejects the write
            DatabaseError: If the store fails for any other reason
        """
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Database error during commit: {str(e)}", exc_info=True)
            raise DatabaseError("commit failed", original_exception=e)
