from typing import List
from sqlalchemy.orm import Session
from status_drafter.database import models
from status_drafter.repositories.interfaces import IRoleRepository

class SqlalchemyRoleRepository(IRoleRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, role_model: models.Role) -> models.Role:
        self.db.add(role_model)
        self.db.commit()
        self.db.refresh(role_model)
        return role_model

    def list_by_project_id(self, project_id: int) -> List[models.Role]:
        return self.db.query(models.Role).filter(models.Role.project_id == project_id).order_by(models.Role.id.asc()).all()

    def delete_by_id(self, role_id: int) -> int:
        deleted = self.db.query(models.Role).filter(models.Role.id == role_id).delete(synchronize_session=False)
        self.db.commit()
        return deleted
