from .project import IProjectRepository
from .role import IRoleRepository
from .draft import IDraftRepository

__all__ = ["IProjectRepository", "IRoleRepository", "IDraftRepository"]
