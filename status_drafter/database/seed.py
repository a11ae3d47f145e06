import logging
import random
from datetime import datetime, timedelta, timezone

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .database import engine as default_engine, Base
from .models import Project, Role, Draft

logger = logging.getLogger(__name__)

PROJECTS = [
    {
        "name": "Android App",
        "roles": ["Kotlin Developer", "Android UI/UX", "QA Automator", "Release Manager", "API Integrator"],
    },
    {
        "name": "Website App",
        "roles": ["Frontend React Dev", "Backend Node.js", "DevOps Engineer", "Fullstack Lead", "SEO Specialist"],
    },
    {
        "name": "Desktop App",
        "roles": ["C# Developer", "WPF Designer", "System Architect", "Installer Specialist", "Performance Analyst"],
    },
]

TASKS = [
    "Debugged crash on login screen",
    "Implemented new dashboard widget",
    "Refactored user authentication module",
    "Optimized database queries for performance",
    "Updated documentation for API endpoints",
    "Fixed responsive layout issues on mobile",
    "Configured CI/CD pipeline",
    "Investigated memory leak in background service",
    "Designed new icons for settings menu",
    "Conducted code review for PR #42",
]

BLOCKERS = [
    "", "", "",
    "Waiting for API keys",
    "Server downtime",
    "Ambiguous requirements",
    "Dependency conflict",
]

DRAFTS_PER_PROJECT = 50
HISTORY_DAYS = 60


def build_sample_content(is_daily: bool, task: str, blocker: str, created_at: datetime) -> str:
    formatted_date = created_at.strftime("%d/%m/%Y")
    if is_daily:
        blocker_line = f"Blocker: {blocker}" if blocker else ""
        return (
            f"Daily Update ({formatted_date})\nTask: {task}\nStatus: In Progress\n\n"
            f"Done: {task}\n{blocker_line}"
        )
    return (
        f"Weekly Summary ({formatted_date})\nHighlight: {task}\n\n"
        f"Accomplished: Completed core modules for {task}.\nNext: Testing phase."
    )


def seed_sample_data(bind: Engine = None, rng: random.Random = None, now: datetime = None) -> dict:
    """
    테이블을 모두 지우고 다시 만든 뒤, 데모용 프로젝트/역할/Draft 데이터를 채웁니다.

    프로젝트 3개, 프로젝트당 역할 5개, 프로젝트당 Draft 50개(최근 60일 범위)를 생성합니다.
    기존 데이터는 모두 삭제되므로 개발 환경에서만 사용하세요.

    Returns:
        생성된 행 개수 {"projects": int, "roles": int, "drafts": int}
    """
    bind = bind or default_engine
    rng = rng or random.Random()
    # created_at은 DB의 CURRENT_TIMESTAMP와 같은 naive UTC로 저장합니다.
    now = now or datetime.now(timezone.utc).replace(tzinfo=None)

    Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)

    session = sessionmaker(autocommit=False, autoflush=False, bind=bind)()
    counts = {"projects": 0, "roles": 0, "drafts": 0}
    try:
        for spec in PROJECTS:
            project = Project(name=spec["name"])
            project.roles = [Role(name=role_name) for role_name in spec["roles"]]
            session.add(project)
            session.flush()  # id 할당
            counts["projects"] += 1
            counts["roles"] += len(project.roles)

            for _ in range(DRAFTS_PER_PROJECT):
                is_daily = rng.random() > 0.3
                role = rng.choice(project.roles)
                task = rng.choice(TASKS)
                blocker = rng.choice(BLOCKERS)
                created_at = now - timedelta(days=rng.randrange(HISTORY_DAYS))

                session.add(Draft(
                    type="daily" if is_daily else "weekly",
                    content=build_sample_content(is_daily, task, blocker, created_at),
                    project_id=project.id,
                    role_id=role.id,
                    created_at=created_at,
                ))
                counts["drafts"] += 1

        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

    logger.info(
        "Database populated with %d projects, %d roles and %d drafts.",
        counts["projects"], counts["roles"], counts["drafts"],
    )
    return counts


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    seed_sample_data()
