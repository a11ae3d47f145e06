import re
from datetime import timezone
from typing import Dict, Any, List, Optional

from status_drafter.database import models
from status_drafter.repositories.interfaces import IDraftRepository

DEFAULT_HISTORY_LIMIT = 50
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_limit(raw_limit: Any, default: int = DEFAULT_HISTORY_LIMIT) -> int:
    """
    쿼리 문자열의 limit 값을 정수로 바꿉니다.
    앞쪽 숫자만 읽으므로 "5.5"는 5, "10abc"는 10이 됩니다. 숫자로 시작하지 않거나 0 이하이면 기본값을 씁니다.
    """
    match = _LEADING_INT.match("" if raw_limit is None else str(raw_limit))
    if not match:
        return default
    limit = int(match.group(1))
    return limit if limit > 0 else default


def serialize_timestamp(value) -> Optional[str]:
    # SQLite CURRENT_TIMESTAMP는 naive UTC로 돌아옴
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class DraftService:
    """상태 보고서(Draft)의 저장, 조회, 삭제를 담당하는 서비스입니다."""

    def __init__(self, draft_repo: IDraftRepository):
        self.draft_repo = draft_repo

    def create_draft(self, type: str, content: str, project_id: Optional[int] = None,
                     role_id: Optional[int] = None) -> Dict[str, Any]:
        """
        렌더링된 보고서 텍스트를 저장합니다.

        type 값('daily' / 'weekly')은 테이블의 CHECK 제약으로 검증되며,
        위반 시 IntegrityError가 그대로 전파됩니다.

        Returns:
            저장된 Draft의 id, type, content.
        """
        draft = self.draft_repo.create(models.Draft(
            type=type,
            content=content,
            project_id=project_id,
            role_id=role_id,
        ))
        return {"id": draft.id, "type": draft.type, "content": draft.content}

    def list_drafts(self, limit: Any = DEFAULT_HISTORY_LIMIT) -> List[Dict[str, Any]]:
        """최근 Draft를 프로젝트/역할 이름과 함께 최대 limit개 조회합니다."""
        rows = self.draft_repo.list_recent(parse_limit(limit))
        return [
            {
                "id": draft.id,
                "type": draft.type,
                "content": draft.content,
                "project_id": draft.project_id,
                "role_id": draft.role_id,
                "created_at": serialize_timestamp(draft.created_at),
                "project_name": project_name,
                "role_name": role_name,
            }
            for draft, project_name, role_name in rows
        ]

    def delete_draft(self, draft_id: int) -> int:
        """Draft를 삭제하고 삭제된 행 수를 반환합니다. 없는 ID면 0입니다."""
        return self.draft_repo.delete_by_id(draft_id)
