from abc import ABC, abstractmethod
from typing import List
from status_drafter.database import models

class IRoleRepository(ABC):
    @abstractmethod
    def create(self, role_model: models.Role) -> models.Role:
        """새로운 역할을 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def list_by_project_id(self, project_id: int) -> List[models.Role]:
        """특정 프로젝트에 속한 모든 역할의 목록을 조회합니다."""
        pass

    @abstractmethod
    def delete_by_id(self, role_id: int) -> int:
        """역할을 삭제하고 삭제된 행의 개수를 반환합니다."""
        pass
