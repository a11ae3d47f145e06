from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base

class Project(Base):
    """
    상태 보고서(Draft)를 분류하는 프로젝트입니다. (예: 'Website App')
    이름은 유일해야 하며, 프로젝트를 삭제하면 소속된 역할(Role)도 함께 삭제됩니다.
    Draft는 프로젝트를 약하게 참조하므로 삭제되지 않고 그대로 남습니다.
    """
    __tablename__ = "projects"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)

    roles = relationship("Role", back_populates="project", cascade="all, delete-orphan")
