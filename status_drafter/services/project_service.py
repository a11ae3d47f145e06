from typing import Dict, Any, List

from status_drafter.database import models
from status_drafter.repositories.interfaces import IProjectRepository, IRoleRepository
from status_drafter.services.exceptions import DuplicateProjectNameError, InvalidProjectError

class ProjectService:
    """Draft 분류에 쓰이는 프로젝트와 역할(Role)을 관리하는 서비스입니다."""

    def __init__(self, project_repo: IProjectRepository, role_repo: IRoleRepository):
        """
        ProjectService를 초기화합니다.

        Args:
            project_repo: 프로젝트 데이터에 접근하기 위한 리포지토리.
            role_repo: 역할 데이터에 접근하기 위한 리포지토리.
        """
        self.project_repo = project_repo
        self.role_repo = role_repo

    def create_project(self, name: str) -> Dict[str, Any]:
        """
        새로운 프로젝트를 생성합니다.

        Args:
            name: 생성할 프로젝트의 이름.

        Returns:
            생성된 프로젝트의 ID와 이름을 담은 딕셔너리.

        Raises:
            DuplicateProjectNameError: 동일한 이름의 프로젝트가 이미 존재할 때.
        """
        if name is not None and self.project_repo.find_by_name(name):
            raise DuplicateProjectNameError(f"Project with name '{name}' already exists.")
        created_project = self.project_repo.create(models.Project(name=name))
        return {"id": created_project.id, "name": created_project.name}

    def list_projects(self) -> List[Dict[str, Any]]:
        """모든 프로젝트의 목록을 조회합니다."""
        projects = self.project_repo.list_all()
        return [{"id": p.id, "name": p.name} for p in projects]

    def delete_project(self, project_id: int) -> int:
        """
        프로젝트와 소속 역할을 삭제합니다. 이 프로젝트를 참조하던 Draft는 남겨둡니다.
        존재하지 않는 ID는 에러 없이 0을 반환합니다.
        """
        return self.project_repo.delete_by_id(project_id)

    def create_role(self, name: str, project_id: int) -> Dict[str, Any]:
        """
        기존 프로젝트에 새로운 역할을 추가합니다.

        Raises:
            InvalidProjectError: project_id에 해당하는 프로젝트가 없을 때.
        """
        if project_id is None or not self.project_repo.find_by_id(project_id):
            raise InvalidProjectError(f"Project with id '{project_id}' does not exist.")
        created_role = self.role_repo.create(models.Role(name=name, project_id=project_id))
        return {"id": created_role.id, "name": created_role.name, "project_id": created_role.project_id}

    def list_roles(self, project_id: int) -> List[Dict[str, Any]]:
        """특정 프로젝트에 속한 역할 목록을 조회합니다."""
        roles = self.role_repo.list_by_project_id(project_id)
        return [{"id": r.id, "project_id": r.project_id, "name": r.name} for r in roles]

    def delete_role(self, role_id: int) -> int:
        """역할을 삭제합니다. 존재하지 않는 ID는 에러 없이 0을 반환합니다."""
        return self.role_repo.delete_by_id(role_id)
