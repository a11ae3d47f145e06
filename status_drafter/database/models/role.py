from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class Role(Base):
    """
    프로젝트 안에서 작성자가 맡은 역할입니다. (예: 'Backend', 'QA Automator')
    반드시 기존 프로젝트에 소속되어 생성됩니다.
    """
    __tablename__ = "roles"
    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)

    project = relationship("Project", back_populates="roles")
