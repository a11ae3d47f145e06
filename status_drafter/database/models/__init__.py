from .project import Project
from .role import Role
from .draft import Draft, DRAFT_TYPES

__all__ = ["Project", "Role", "Draft", "DRAFT_TYPES"]
