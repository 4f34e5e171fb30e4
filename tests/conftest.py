import pytest
from fastapi.testclient import TestClient

from wyr.config import Settings
from wyr.database import build_engine, build_session_factory, init_db
from wyr.main import create_app
from wyr.services.question_repository import QuestionRepository


def make_settings(db_path, **overrides) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{db_path}",
        DEBUG=False,
        **overrides,
    )


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(make_settings(tmp_path / "repo.db"))
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def repo(db_session):
    return QuestionRepository(db_session)


@pytest.fixture
def app(tmp_path):
    return create_app(make_settings(tmp_path / "api.db"))


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client
