import pytest
from sqlalchemy.orm import sessionmaker

from status_drafter.database.database import make_engine
from status_drafter.database.db_init import initialize_db


@pytest.fixture
def engine():
    """테스트마다 새로운 인메모리 SQLite 엔진을 만들고 스키마를 초기화합니다."""
    test_engine = make_engine("sqlite://")
    initialize_db(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()
