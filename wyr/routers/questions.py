"""
Would You Rather router — random question, vote, submit, flag.

Endpoints:
    GET  /api/wyr/question                  → random unflagged question
    POST /api/wyr/vote/{question_id}/{option} → vote for option A or B
    POST /api/wyr/submit                    → submit a new question pair
    POST /api/wyr/flag/{question_id}        → flag a question (one-way)

Path parameters are taken as raw strings and validated by the poll core,
so malformed ids surface as the same 400 the core reports.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from wyr.database import get_db
from wyr.schemas.question import (
    ErrorOut,
    FlagOut,
    QuestionOut,
    QuestionSubmit,
    SubmittedQuestionOut,
    VoteOut,
)
from wyr.services import polls
from wyr.services.question_repository import QuestionRepository

router = APIRouter(prefix="/api/wyr", tags=["would-you-rather"])

_ERRORS = {
    400: {"model": ErrorOut},
    404: {"model": ErrorOut},
    500: {"model": ErrorOut},
    503: {"model": ErrorOut},
}


def get_repository(db: AsyncSession = Depends(get_db)) -> QuestionRepository:
    return QuestionRepository(db)


@router.get("/question", response_model=QuestionOut, responses=_ERRORS)
async def get_question(repo: QuestionRepository = Depends(get_repository)):
    """Return one random question that has not been flagged."""
    return await polls.fetch_random_question(repo)


@router.post("/vote/{question_id}/{option}", response_model=VoteOut, responses=_ERRORS)
async def vote(
    question_id: str,
    option: str,
    repo: QuestionRepository = Depends(get_repository),
):
    """Record one vote for option A or B (case-insensitive)."""
    return await polls.cast_vote(repo, question_id, option)


@router.post(
    "/submit",
    response_model=SubmittedQuestionOut,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
)
async def submit(
    payload: Optional[QuestionSubmit] = None,
    repo: QuestionRepository = Depends(get_repository),
):
    """Submit a new pair of options. Both are trimmed and must differ."""
    payload = payload or QuestionSubmit()
    return await polls.submit_question(repo, payload.option_a, payload.option_b)


@router.post("/flag/{question_id}", response_model=FlagOut, responses=_ERRORS)
async def flag(question_id: str, repo: QuestionRepository = Depends(get_repository)):
    """Flag a question so it is never served or voted on again."""
    return await polls.flag_question(repo, question_id)
