from abc import ABC, abstractmethod
from typing import List, Optional
from status_drafter.database import models

class IProjectRepository(ABC):
    @abstractmethod
    def create(self, project_model: models.Project) -> models.Project:
        """새로운 프로젝트를 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, project_id: int) -> Optional[models.Project]:
        """고유 ID로 특정 프로젝트를 조회합니다."""
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[models.Project]:
        """이름으로 특정 프로젝트를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Project]:
        """모든 프로젝트의 목록을 조회합니다."""
        pass

    @abstractmethod
    def delete_by_id(self, project_id: int) -> int:
        """
        프로젝트를 삭제합니다. 소속된 역할(Role)도 같은 트랜잭션에서 함께 삭제됩니다.

        Returns:
            삭제된 프로젝트 행의 개수 (존재하지 않으면 0).
        """
        pass
