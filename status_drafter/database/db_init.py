import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from .database import engine as default_engine, Base
from . import models  # noqa: F401  (모든 모델을 Base.metadata에 등록)

logger = logging.getLogger(__name__)

# 예전 버전의 drafts 테이블에는 없던 컬럼들 (테이블, 컬럼, DDL 타입)
COLUMN_MIGRATIONS = [
    ("drafts", "project_id", "INTEGER"),
    ("drafts", "role_id", "INTEGER"),
]


def missing_columns(bind: Engine):
    """현재 DB 스키마에 아직 없는 마이그레이션 대상 컬럼 목록을 반환합니다."""
    inspector = inspect(bind)
    existing = {}
    missing = []
    for table, column, ddl_type in COLUMN_MIGRATIONS:
        if table not in existing:
            existing[table] = {c["name"] for c in inspector.get_columns(table)}
        if column not in existing[table]:
            missing.append((table, column, ddl_type))
    return missing


def apply_column_migrations(bind: Engine) -> list:
    """
    누락된 컬럼만 ALTER TABLE ... ADD COLUMN으로 추가합니다.

    컬럼 존재 여부를 먼저 확인하므로 몇 번을 실행해도 결과가 같고,
    에러를 무시하는 방식에 의존하지 않습니다.

    Returns:
        새로 추가된 "table.column" 문자열의 리스트.
    """
    applied = []
    to_add = missing_columns(bind)
    if not to_add:
        return applied

    with bind.begin() as conn:
        for table, column, ddl_type in to_add:
            conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {ddl_type}"))
            logger.info("Migration applied: added column %s.%s", table, column)
            applied.append(f"{table}.{column}")
    return applied


def initialize_db(bind: Engine = None) -> list:
    """
    테이블을 생성하고(이미 존재하면 건너뜀) 컬럼 마이그레이션을 적용합니다.
    서버가 시작될 때마다 호출해도 안전합니다.
    """
    bind = bind or default_engine
    logger.info("Initializing database at %s", bind.url)

    Base.metadata.create_all(bind=bind)
    applied = apply_column_migrations(bind)

    if applied:
        logger.info("Database schema upgraded (%d column(s) added).", len(applied))
    else:
        logger.info("Database schema is up to date.")
    return applied


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    initialize_db()
