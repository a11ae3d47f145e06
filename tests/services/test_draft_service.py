# tests/services/test_draft_service.py
import pytest
from datetime import datetime
from unittest.mock import MagicMock

from status_drafter.services.draft_service import DraftService, parse_limit, serialize_timestamp
from status_drafter.repositories.interfaces import IDraftRepository
from status_drafter.database import models

@pytest.fixture
def mock_draft_repo() -> MagicMock:
    """IDraftRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IDraftRepository)

@pytest.fixture
def draft_service(mock_draft_repo: MagicMock) -> DraftService:
    return DraftService(mock_draft_repo)


class TestCreateDraft:
    def test_create_draft_returns_id_type_content(self, draft_service: DraftService, mock_draft_repo: MagicMock):
        # === Arrange ===
        mock_draft_repo.create.return_value = models.Draft(id=7, type="daily", content="Task: x", project_id=1, role_id=2)

        # === Act ===
        result = draft_service.create_draft("daily", "Task: x", 1, 2)

        # === Assert ===
        assert result == {"id": 7, "type": "daily", "content": "Task: x"}
        saved = mock_draft_repo.create.call_args.args[0]
        assert (saved.type, saved.content, saved.project_id, saved.role_id) == ("daily", "Task: x", 1, 2)

    def test_project_and_role_are_optional(self, draft_service: DraftService, mock_draft_repo: MagicMock):
        mock_draft_repo.create.return_value = models.Draft(id=1, type="weekly", content="...")

        draft_service.create_draft("weekly", "...")

        saved = mock_draft_repo.create.call_args.args[0]
        assert saved.project_id is None
        assert saved.role_id is None


class TestListDrafts:
    def test_rows_are_joined_with_names(self, draft_service: DraftService, mock_draft_repo: MagicMock):
        # === Arrange ===
        draft = models.Draft(id=1, type="daily", content="c", project_id=5, role_id=None,
                             created_at=datetime(2024, 3, 15, 9, 30))
        mock_draft_repo.list_recent.return_value = [(draft, "Website App", None)]

        # === Act ===
        rows = draft_service.list_drafts(5)

        # === Assert ===
        assert rows == [{
            "id": 1, "type": "daily", "content": "c", "project_id": 5, "role_id": None,
            "created_at": "2024-03-15T09:30:00+00:00",
            "project_name": "Website App", "role_name": None,
        }]
        mock_draft_repo.list_recent.assert_called_once_with(5)

    @pytest.mark.parametrize("raw, expected", [
        (None, 50), ("abc", 50), ("0", 50), ("-3", 50), ("100", 100), (5, 5),
        ("5.5", 5), ("10abc", 10), (" 7", 7), ("x10", 50),
    ])
    def test_parse_limit(self, raw, expected):
        assert parse_limit(raw) == expected

    def test_default_limit(self, draft_service: DraftService, mock_draft_repo: MagicMock):
        mock_draft_repo.list_recent.return_value = []
        draft_service.list_drafts()
        mock_draft_repo.list_recent.assert_called_once_with(50)


def test_serialize_timestamp_none():
    assert serialize_timestamp(None) is None


def test_delete_draft_returns_changes(draft_service: DraftService, mock_draft_repo: MagicMock):
    mock_draft_repo.delete_by_id.return_value = 0
    assert draft_service.delete_draft(123) == 0
    mock_draft_repo.delete_by_id.assert_called_once_with(123)
