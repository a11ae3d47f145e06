from sqlalchemy import Column, Integer, String, Text, DateTime, CheckConstraint, func
from ..database import Base

DRAFT_TYPES = ("daily", "weekly")

class Draft(Base):
    """
    저장된 상태 보고서 한 건입니다. content에는 템플릿으로 렌더링된 최종 텍스트가 들어갑니다.

    project_id / role_id는 외래 키 제약이 없는 약한 참조입니다.
    프로젝트나 역할이 삭제되어도 Draft는 과거 보고서의 스냅샷으로 그대로 남습니다.
    created_at은 INSERT 시점에 DB가 채우며 이후 변경되지 않습니다.
    """
    __tablename__ = "drafts"
    __table_args__ = (
        CheckConstraint(
            "type IN ({})".format(", ".join(f"'{t}'" for t in DRAFT_TYPES)), name="ck_drafts_type"
        ),
    )
    id = Column(Integer, primary_key=True, index=True)
    type = Column(String, nullable=False)
    content = Column(Text)
    project_id = Column(Integer, nullable=True)
    role_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
