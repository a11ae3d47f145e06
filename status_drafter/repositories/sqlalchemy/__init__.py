from .sqlalchemy_project_repository import SqlalchemyProjectRepository
from .sqlalchemy_role_repository import SqlalchemyRoleRepository
from .sqlalchemy_draft_repository import SqlalchemyDraftRepository

__all__ = ["SqlalchemyProjectRepository", "SqlalchemyRoleRepository", "SqlalchemyDraftRepository"]
