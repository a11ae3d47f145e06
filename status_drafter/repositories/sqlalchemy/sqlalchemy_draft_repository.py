from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from status_drafter.database import models
from status_drafter.repositories.interfaces import IDraftRepository

class SqlalchemyDraftRepository(IDraftRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, draft_model: models.Draft) -> models.Draft:
        self.db.add(draft_model)
        self.db.commit()
        self.db.refresh(draft_model)
        return draft_model

    def list_recent(self, limit: int) -> List[Tuple[models.Draft, Optional[str], Optional[str]]]:
        rows = (
            self.db.query(
                models.Draft,
                models.Project.name.label("project_name"),
                models.Role.name.label("role_name"),
            )
            .outerjoin(models.Project, models.Draft.project_id == models.Project.id)
            .outerjoin(models.Role, models.Draft.role_id == models.Role.id)
            .order_by(models.Draft.created_at.desc(), models.Draft.id.desc())
            .limit(limit)
            .all()
        )
        return [(draft, project_name, role_name) for draft, project_name, role_name in rows]

    def delete_by_id(self, draft_id: int) -> int:
        deleted = self.db.query(models.Draft).filter(models.Draft.id == draft_id).delete(synchronize_session=False)
        self.db.commit()
        return deleted
