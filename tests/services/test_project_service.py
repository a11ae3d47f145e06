# tests/services/test_project_service.py
import pytest
from unittest.mock import MagicMock, ANY

from status_drafter.services.project_service import ProjectService
from status_drafter.services.exceptions import DuplicateProjectNameError, InvalidProjectError
from status_drafter.repositories.interfaces import IProjectRepository, IRoleRepository
from status_drafter.database import models

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_project_repo() -> MagicMock:
    """IProjectRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IProjectRepository)

@pytest.fixture
def mock_role_repo() -> MagicMock:
    """IRoleRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IRoleRepository)

@pytest.fixture
def project_service(mock_project_repo: MagicMock, mock_role_repo: MagicMock) -> ProjectService:
    """테스트에 사용될 ProjectService 인스턴스를 생성하고, 의존성을 주입합니다."""
    return ProjectService(mock_project_repo, mock_role_repo)

# ===================================================================
#  프로젝트 관리(Project Management) 테스트
# ===================================================================
class TestProjectManagement:
    def test_create_project_success(self, project_service: ProjectService, mock_project_repo: MagicMock):
        """프로젝트 생성 성공 시나리오를 테스트합니다."""
        # === Arrange ===
        mock_project_repo.find_by_name.return_value = None
        mock_project_repo.create.return_value = models.Project(id=1, name="Website App")

        # === Act ===
        project = project_service.create_project("Website App")

        # === Assert ===
        assert project == {"id": 1, "name": "Website App"}
        mock_project_repo.find_by_name.assert_called_once_with("Website App")
        mock_project_repo.create.assert_called_once_with(ANY)

    def test_create_project_fails_if_name_exists(self, project_service: ProjectService, mock_project_repo: MagicMock):
        """이름이 중복되면 DuplicateProjectNameError가 발생하는지 테스트합니다."""
        # === Arrange ===
        mock_project_repo.find_by_name.return_value = models.Project(id=1, name="Website App")

        # === Act & Assert ===
        with pytest.raises(DuplicateProjectNameError):
            project_service.create_project("Website App")
        mock_project_repo.create.assert_not_called()

    def test_list_projects(self, project_service: ProjectService, mock_project_repo: MagicMock):
        mock_project_repo.list_all.return_value = [
            models.Project(id=1, name="Android App"),
            models.Project(id=2, name="Website App"),
        ]

        assert project_service.list_projects() == [
            {"id": 1, "name": "Android App"},
            {"id": 2, "name": "Website App"},
        ]

    def test_delete_unknown_project_is_noop(self, project_service: ProjectService, mock_project_repo: MagicMock):
        """존재하지 않는 프로젝트 삭제는 에러 없이 0을 반환합니다."""
        mock_project_repo.delete_by_id.return_value = 0

        assert project_service.delete_project(99) == 0
        mock_project_repo.delete_by_id.assert_called_once_with(99)

# ===================================================================
#  역할 관리(Role Management) 테스트
# ===================================================================
class TestRoleManagement:
    def test_create_role_success(self, project_service: ProjectService, mock_project_repo: MagicMock, mock_role_repo: MagicMock):
        """기존 프로젝트에 역할을 추가하는 시나리오를 테스트합니다."""
        # === Arrange ===
        mock_project_repo.find_by_id.return_value = models.Project(id=1, name="Website App")
        mock_role_repo.create.return_value = models.Role(id=3, name="Backend", project_id=1)

        # === Act ===
        role = project_service.create_role("Backend", 1)

        # === Assert ===
        assert role == {"id": 3, "name": "Backend", "project_id": 1}
        mock_project_repo.find_by_id.assert_called_once_with(1)

    def test_create_role_for_missing_project(self, project_service: ProjectService, mock_project_repo: MagicMock, mock_role_repo: MagicMock):
        """존재하지 않는 프로젝트에 역할을 만들면 InvalidProjectError가 발생합니다."""
        mock_project_repo.find_by_id.return_value = None

        with pytest.raises(InvalidProjectError):
            project_service.create_role("Backend", 42)
        mock_role_repo.create.assert_not_called()

    def test_create_role_without_project_id(self, project_service: ProjectService, mock_project_repo: MagicMock, mock_role_repo: MagicMock):
        with pytest.raises(InvalidProjectError):
            project_service.create_role("Backend", None)
        mock_project_repo.find_by_id.assert_not_called()
        mock_role_repo.create.assert_not_called()

    def test_list_roles(self, project_service: ProjectService, mock_role_repo: MagicMock):
        mock_role_repo.list_by_project_id.return_value = [models.Role(id=1, name="Backend", project_id=2)]

        assert project_service.list_roles(2) == [{"id": 1, "project_id": 2, "name": "Backend"}]
        mock_role_repo.list_by_project_id.assert_called_once_with(2)
