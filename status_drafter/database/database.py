from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from status_drafter.config import settings


def make_engine(database_url: str) -> Engine:
    """
    SQLAlchemy 엔진을 생성합니다.

    SQLite는 기본적으로 외래 키 제약을 검사하지 않으므로, 연결이 열릴 때마다
    `PRAGMA foreign_keys=ON`을 실행해 프로젝트 삭제 시 역할(Role)이
    ON DELETE CASCADE로 함께 지워지도록 합니다.
    인메모리 DB(`sqlite://`)는 모든 세션이 하나의 연결을 공유하도록 StaticPool을 사용합니다.
    """
    kwargs = {}
    if database_url.startswith("sqlite"):
        # wsgiref 서버와 테스트에서 세션이 다른 스레드로 넘어갈 수 있음
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    new_engine = create_engine(database_url, **kwargs)

    if new_engine.dialect.name == "sqlite":
        @event.listens_for(new_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


# 기본 엔진: 설정 파일(.env)의 DATABASE_URL을 사용합니다.
engine = make_engine(settings.database_url)

# autocommit=False, autoflush=False: 리포지토리가 명시적으로 commit해야 DB에 반영됩니다.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 모든 모델 클래스가 상속받을 Base 클래스
Base = declarative_base()
