import asyncio

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from wyr.errors import DuplicateOptions, NotFound
from wyr.models.question import Question
from wyr.services.question_repository import QuestionRepository, VoteTally
from wyr.services.validation import VoteOption


async def count_questions(session) -> int:
    return (await session.execute(select(func.count(Question.id)))).scalar()


async def reload(session, question_id) -> Question:
    result = await session.execute(
        select(Question).where(Question.id == question_id).execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def test_insert_starts_unflagged_with_zero_votes(repo, db_session):
    question = await repo.insert("  Cats ", "Dogs")

    stored = await reload(db_session, question.id)
    assert stored.option_a_text == "Cats"
    assert stored.option_b_text == "Dogs"
    assert (stored.option_a_votes, stored.option_b_votes) == (0, 0)
    assert stored.is_flagged is False


async def test_insert_rejects_case_insensitive_duplicates(repo, db_session):
    with pytest.raises(DuplicateOptions):
        await repo.insert("Pizza", " pizza ")
    assert await count_questions(db_session) == 0


async def test_table_constraint_rejects_duplicates_written_around_the_repository(db_session):
    db_session.add(Question(option_a_text="Same", option_b_text="SAME"))
    with pytest.raises(IntegrityError):
        await db_session.commit()
    await db_session.rollback()
    assert await count_questions(db_session) == 0


async def test_pick_random_unflagged_with_empty_table_is_not_found(repo):
    with pytest.raises(NotFound):
        await repo.pick_random_unflagged()


async def test_pick_random_never_returns_flagged_questions(repo):
    flagged_one = await repo.insert("Tea", "Coffee")
    eligible = await repo.insert("Sun", "Moon")
    flagged_two = await repo.insert("Sea", "Mountains")
    await repo.flag(flagged_one.id)
    await repo.flag(flagged_two.id)

    for _ in range(25):
        picked = await repo.pick_random_unflagged()
        assert picked.id == eligible.id


async def test_pick_random_reaches_every_eligible_question(repo):
    ids = {(await repo.insert(f"Left {n}", f"Right {n}")).id for n in range(3)}

    seen = set()
    for _ in range(300):
        seen.add((await repo.pick_random_unflagged()).id)
    assert seen == ids


async def test_pick_random_when_everything_is_flagged(repo):
    question = await repo.insert("Tea", "Coffee")
    await repo.flag(question.id)

    with pytest.raises(NotFound):
        await repo.pick_random_unflagged()


async def test_increment_vote_bumps_exactly_one_counter(repo, db_session):
    question = await repo.insert("Cats", "Dogs")

    tally = await repo.increment_vote(question.id, VoteOption.A)
    assert tally == VoteTally(question.id, 1, 0)

    for expected_b in (1, 2, 3):
        tally = await repo.increment_vote(question.id, VoteOption.B)
        assert tally == VoteTally(question.id, 1, expected_b)

    stored = await reload(db_session, question.id)
    assert (stored.option_a_votes, stored.option_b_votes) == (1, 3)


async def test_increment_vote_missing_question_is_not_found(repo):
    with pytest.raises(NotFound):
        await repo.increment_vote(999999, VoteOption.A)


async def test_increment_vote_on_flagged_question_is_not_found(repo, db_session):
    question = await repo.insert("Cats", "Dogs")
    await repo.increment_vote(question.id, VoteOption.A)
    await repo.flag(question.id)

    with pytest.raises(NotFound):
        await repo.increment_vote(question.id, VoteOption.B)

    stored = await reload(db_session, question.id)
    assert (stored.option_a_votes, stored.option_b_votes) == (1, 0)


async def test_flag_is_at_most_once(repo):
    question = await repo.insert("Cats", "Dogs")

    assert await repo.flag(question.id) == question.id
    with pytest.raises(NotFound):
        await repo.flag(question.id)


async def test_flag_missing_question_is_not_found(repo):
    with pytest.raises(NotFound):
        await repo.flag(12345)


async def test_concurrent_votes_are_not_lost(session_factory):
    async with session_factory() as session:
        question = await QuestionRepository(session).insert("Cats", "Dogs")

    async def vote(option):
        async with session_factory() as session:
            return await QuestionRepository(session).increment_vote(question.id, option)

    options = [VoteOption.A] * 6 + [VoteOption.B] * 4
    await asyncio.gather(*(vote(option) for option in options))

    async with session_factory() as session:
        stored = await reload(session, question.id)
    assert (stored.option_a_votes, stored.option_b_votes) == (6, 4)


async def test_concurrent_flags_succeed_exactly_once(session_factory):
    async with session_factory() as session:
        question = await QuestionRepository(session).insert("Cats", "Dogs")

    async def flag():
        async with session_factory() as session:
            try:
                return await QuestionRepository(session).flag(question.id)
            except NotFound:
                return None

    results = await asyncio.gather(*(flag() for _ in range(5)))
    assert results.count(question.id) == 1
    assert results.count(None) == 4
