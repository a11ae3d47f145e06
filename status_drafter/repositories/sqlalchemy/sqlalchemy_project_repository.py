from typing import List, Optional
from sqlalchemy.orm import Session
from status_drafter.database import models
from status_drafter.repositories.interfaces import IProjectRepository

class SqlalchemyProjectRepository(IProjectRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, project_model: models.Project) -> models.Project:
        self.db.add(project_model)
        self.db.commit()
        self.db.refresh(project_model)
        return project_model

    def find_by_id(self, project_id: int) -> Optional[models.Project]:
        return self.db.query(models.Project).filter(models.Project.id == project_id).first()

    def find_by_name(self, name: str) -> Optional[models.Project]:
        return self.db.query(models.Project).filter(models.Project.name == name).first()

    def list_all(self) -> List[models.Project]:
        return self.db.query(models.Project).order_by(models.Project.id.asc()).all()

    def delete_by_id(self, project_id: int) -> int:
        project = self.find_by_id(project_id)
        if not project:
            return 0
        # relationship cascade로 역할도 같은 commit 안에서 삭제됨
        self.db.delete(project)
        self.db.commit()
        return 1
