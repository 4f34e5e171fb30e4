import asyncio

from wyr.config import settings
from wyr.database import build_engine, build_session_factory, init_db
from wyr.errors import DuplicateOptions
from wyr.services.question_repository import QuestionRepository

STARTER_QUESTIONS = [
    ("Be a famous movie star", "Be a famous singer"),
    ("Be able to fly", "Be invisible"),
    ("Live without music", "Live without movies"),
    ("Always be 10 minutes late", "Always be 20 minutes early"),
    ("Explore the deep ocean", "Explore outer space"),
    ("Have a rewind button for your life", "Have a pause button for your life"),
    ("Only eat pizza forever", "Never eat pizza again"),
    ("Speak every language", "Play every instrument"),
]


async def async_main():
    engine = build_engine(settings)
    await init_db(engine)
    async_session = build_session_factory(engine)

    async with async_session() as session:
        repo = QuestionRepository(session)
        for option_a, option_b in STARTER_QUESTIONS:
            try:
                question = await repo.insert(option_a, option_b)
            except DuplicateOptions:
                print(f"Skipped: {option_a!r} / {option_b!r}")
                continue
            print(f"Seeded question {question.id}: {option_a} / {option_b}")

    await engine.dispose()
    print("Done seeding questions.")


if __name__ == "__main__":
    asyncio.run(async_main())
