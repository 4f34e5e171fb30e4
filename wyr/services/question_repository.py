"""
Question repository — every read and write against the questions table.

Votes and flags are single conditional ``UPDATE ... RETURNING`` statements,
so concurrent requests on the same row never lose an update and a flagged
row can never be voted on. SQLAlchemy errors are translated here into the
error kinds of ``wyr.errors``.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, NamedTuple

from sqlalchemy import func, select, update
from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from wyr.errors import (
    DuplicateOptions,
    NotFound,
    StorageFailure,
    StorageUnavailable,
    WyrError,
)
from wyr.models.question import Question
from wyr.services.validation import VoteOption, options_match

logger = logging.getLogger(__name__)

_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError)


class VoteTally(NamedTuple):
    id: int
    option_a_votes: int
    option_b_votes: int


@contextmanager
def storage_errors(action: str, failure_message: str) -> Iterator[None]:
    """Map driver/pool errors raised inside the block to StorageUnavailable / StorageFailure."""
    try:
        yield
    except WyrError:
        raise
    except _UNAVAILABLE_ERRORS as e:
        logger.error(f"{action}: database unavailable ({e})")
        raise StorageUnavailable() from e
    except SQLAlchemyError as e:
        logger.error(f"{action}: {e}")
        raise StorageFailure(failure_message) from e


class QuestionRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def pick_random_unflagged(self) -> Question:
        """Uniformly random eligible question."""
        with storage_errors("Fetch question", "Failed to fetch question."):
            result = await self.session.execute(
                select(Question)
                .where(Question.is_flagged.is_(False))
                .order_by(func.random())
                .limit(1)
            )
            question = result.scalar_one_or_none()

        if question is None:
            raise NotFound("No available questions found.")
        return question

    async def increment_vote(self, question_id: int, option: VoteOption) -> VoteTally:
        """Add one vote to ``option`` of an unflagged question and return the new tallies."""
        column = Question.option_a_votes if option is VoteOption.A else Question.option_b_votes

        with storage_errors(f"Vote (ID: {question_id}, Opt: {option.value})", "Failed to record vote."):
            result = await self.session.execute(
                update(Question)
                .where(Question.id == question_id, Question.is_flagged.is_(False))
                .values({column: column + 1})
                .returning(Question.id, Question.option_a_votes, Question.option_b_votes)
                .execution_options(synchronize_session=False)
            )
            row = result.first()
            await self.session.commit()

        if row is None:
            raise NotFound("Question not found.")
        return VoteTally(*row)

    async def insert(self, option_a: str, option_b: str) -> Question:
        """Store a new unflagged question with zero votes."""
        option_a, option_b = option_a.strip(), option_b.strip()
        if options_match(option_a, option_b):
            raise DuplicateOptions()

        with storage_errors("Submit", "Submission failed."):
            question = Question(
                option_a_text=option_a,
                option_b_text=option_b,
                option_a_votes=0,
                option_b_votes=0,
                is_flagged=False,
            )
            self.session.add(question)
            try:
                await self.session.commit()
            except IntegrityError as e:
                await self.session.rollback()
                logger.warning(f"Submit rejected by table constraint: {e.orig}")
                raise DuplicateOptions() from e

        return question

    async def flag(self, question_id: int) -> int:
        """Flag an unflagged question. A second flag on the same id is NotFound."""
        with storage_errors(f"Flag (ID: {question_id})", "Flagging failed."):
            result = await self.session.execute(
                update(Question)
                .where(Question.id == question_id, Question.is_flagged.is_(False))
                .values(is_flagged=True)
                .returning(Question.id)
                .execution_options(synchronize_session=False)
            )
            flagged_id = result.scalar_one_or_none()
            await self.session.commit()

        if flagged_id is None:
            raise NotFound("Question not found or already flagged.")
        return flagged_id
