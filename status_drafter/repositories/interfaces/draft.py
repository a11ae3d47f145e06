from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from status_drafter.database import models

class IDraftRepository(ABC):
    @abstractmethod
    def create(self, draft_model: models.Draft) -> models.Draft:
        """새로운 Draft를 데이터베이스에 저장합니다. created_at은 DB가 채웁니다."""
        pass

    @abstractmethod
    def list_recent(self, limit: int) -> List[Tuple[models.Draft, Optional[str], Optional[str]]]:
        """
        최근 Draft 목록을 프로젝트/역할 이름과 함께 조회합니다.

        프로젝트와 역할은 LEFT JOIN으로 연결되므로, 참조 대상이 삭제된 Draft도
        이름이 None인 채로 포함됩니다.

        Args:
            limit: 반환할 최대 행 수.

        Returns:
            (Draft, project_name, role_name) 튜플의 리스트.
            created_at 내림차순이며, 같은 시각이면 나중에 저장된 것이 먼저 옵니다.
        """
        pass

    @abstractmethod
    def delete_by_id(self, draft_id: int) -> int:
        """Draft를 삭제하고 삭제된 행의 개수를 반환합니다."""
        pass
