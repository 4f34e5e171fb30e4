"""
Poll operations: validate input, hit the repository, shape the payload.

Each function takes an explicit ``QuestionRepository`` so it can be driven
without FastAPI.
"""

import logging
from typing import Any

from wyr.errors import InvalidInput, NotFound
from wyr.schemas.question import (
    FlagOut,
    Percentages,
    QuestionOut,
    SubmittedQuestion,
    SubmittedQuestionOut,
    VoteOut,
)
from wyr.services.percentages import calculate_vote_percentages
from wyr.services.question_repository import QuestionRepository
from wyr.services.validation import parse_question_id, parse_vote_option, validate_submission

logger = logging.getLogger(__name__)


async def fetch_random_question(repo: QuestionRepository) -> QuestionOut:
    try:
        question = await repo.pick_random_unflagged()
    except NotFound:
        logger.warning("No available questions found.")
        raise

    percentage_a, percentage_b = calculate_vote_percentages(
        question.option_a_votes, question.option_b_votes
    )
    return QuestionOut(
        id=question.id,
        optionA_text=question.option_a_text,
        optionB_text=question.option_b_text,
        optionA_votes=question.option_a_votes,
        optionB_votes=question.option_b_votes,
        optionA_percentage=percentage_a,
        optionB_percentage=percentage_b,
    )


async def cast_vote(repo: QuestionRepository, raw_question_id: Any, raw_option: Any) -> VoteOut:
    try:
        question_id = parse_question_id(raw_question_id)
        option = parse_vote_option(raw_option)
    except InvalidInput as e:
        # The vote route answers every malformed parameter the same way.
        raise type(e)("Invalid input") from None

    try:
        tally = await repo.increment_vote(question_id, option)
    except NotFound:
        logger.warning(f"Vote failed (ID: {question_id} not found or flagged)")
        raise

    percentage_a, percentage_b = calculate_vote_percentages(
        tally.option_a_votes, tally.option_b_votes
    )
    logger.info(f"Vote recorded for Question ID: {tally.id}, Option: {option.value}")
    return VoteOut(
        questionId=tally.id,
        optionAVotes=tally.option_a_votes,
        optionBVotes=tally.option_b_votes,
        percentages=Percentages(optionA=percentage_a, optionB=percentage_b),
    )


async def submit_question(repo: QuestionRepository, raw_option_a: Any, raw_option_b: Any) -> SubmittedQuestionOut:
    text_a, text_b = validate_submission(raw_option_a, raw_option_b)

    question = await repo.insert(text_a, text_b)

    logger.info(f"Submitted Question ID: {question.id}")
    return SubmittedQuestionOut(
        question=SubmittedQuestion(
            id=question.id,
            optionA_text=question.option_a_text,
            optionB_text=question.option_b_text,
        )
    )


async def flag_question(repo: QuestionRepository, raw_question_id: Any) -> FlagOut:
    question_id = parse_question_id(raw_question_id)

    try:
        flagged_id = await repo.flag(question_id)
    except NotFound:
        logger.warning(f"Flag attempt failed (ID: {question_id} not found or already flagged)")
        raise

    logger.info(f"Question {flagged_id} flagged.")
    return FlagOut(questionId=flagged_id)
