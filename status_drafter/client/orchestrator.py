# status_drafter/client/orchestrator.py
import itertools
import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, tzinfo
from typing import Any, Dict, List, Optional

from status_drafter.client.api_client import DraftsApiClient
from status_drafter.utils import dashboard
from status_drafter.utils.draft_formatter import (
    FIELD_NAMES, default_date_range, format_draft, mailto_url, slack_block, blockers_visible
)

logger = logging.getLogger(__name__)

HISTORY_WIDGET_LIMIT = 5
DASHBOARD_LIMIT = 100
ENHANCEABLE_FIELDS = ("taskTitle", "taskDesc", "blockers", "nextSteps")


def default_inputs() -> Dict[str, str]:
    inputs = dict.fromkeys(FIELD_NAMES, "")
    inputs["progressStatus"] = "In Progress"
    return inputs


@dataclass
class EditorState:
    """편집기 화면의 뷰 모델. 포매터와 대시보드 엔진에는 이 값이 명시적으로 전달됩니다."""
    mode: str = "daily"
    inputs: Dict[str, str] = field(default_factory=default_inputs)
    project_id: Optional[int] = None
    role_id: Optional[int] = None
    output: str = ""


@dataclass
class DashboardState:
    drafts: List[Dict[str, Any]] = field(default_factory=list)
    filters: dashboard.DashboardFilters = field(default_factory=dashboard.DashboardFilters)
    applied_ticket: int = 0


class StatusDrafter:
    """
    클라이언트 오케스트레이터.

    편집기 상태(EditorState)를 들고 API를 호출하며, 결과를 포매터와 대시보드 엔진에 넘깁니다.
    알림 메시지는 notifications 리스트에 쌓이고, 실패해도 세션은 계속 사용할 수 있습니다.
    """

    def __init__(self, api: DraftsApiClient, today: Optional[date] = None, tz: Optional[tzinfo] = None):
        self.api = api
        self.today = today
        self.tz = tz
        self.editor = EditorState()
        self.dashboard = DashboardState()
        self.history: List[Dict[str, Any]] = []
        self.projects: List[Dict[str, Any]] = []
        self.roles: List[Dict[str, Any]] = []
        self.notifications: List[str] = []
        self._tickets = itertools.count(1)
        self._latest_ticket = 0
        self.set_mode(self.editor.mode)

    def notify(self, message: str):
        self.notifications.append(message)

    # --------------------------------------------------------------------------
    ## 편집기
    # --------------------------------------------------------------------------

    def set_mode(self, mode: str):
        """모드를 바꾸고 날짜 기본값과 미리보기를 다시 계산합니다."""
        self.editor.mode = mode
        self.editor.inputs["dateRange"] = default_date_range(mode, self.today)
        self.update_preview()

    def update_field(self, name: str, value: str):
        self.editor.inputs[name] = value
        self.update_preview()

    def update_preview(self) -> str:
        self.editor.output = format_draft(self.editor.mode, self.editor.inputs, self.today)
        return self.editor.output

    def show_blockers(self) -> bool:
        return blockers_visible(self.editor.inputs)

    def select_project(self, project_id: Optional[int]):
        self.editor.project_id = project_id
        self.editor.role_id = None
        self.roles = []
        if project_id is not None:
            self.roles = self.api.get_roles(project_id).get("data") or []

    def select_role(self, role_id: Optional[int]):
        self.editor.role_id = role_id

    def save_draft(self) -> bool:
        result = self.api.save_draft(self.editor.mode, self.editor.output,
                                     self.editor.project_id, self.editor.role_id)
        if result.get("error"):
            self.notify("Failed to save (Is server running?)")
            return False
        self.notify("Draft Saved to DB!")
        self.load_history()
        return True

    def load_history(self) -> List[Dict[str, Any]]:
        self.history = self.api.get_history(HISTORY_WIDGET_LIMIT).get("data") or []
        return self.history

    def load_history_item(self, draft_id: int):
        item = next((d for d in self.history if d.get("id") == draft_id), None)
        if item is not None:
            self.editor.output = item.get("content") or ""
            self.notify("Loaded draft from history!")

    def enhance(self) -> bool:
        """
        자유 입력 필드를 AI로 다듬습니다.
        응답에 있고 비어 있지 않은 키만 반영하며, 실패하면 입력값을 건드리지 않습니다.
        """
        fields = {name: self.editor.inputs.get(name, "") for name in ENHANCEABLE_FIELDS}
        if not any(value.strip() for value in fields.values()):
            self.notify("Please enter some text first!")
            return False

        improved = self.api.enhance_fields(fields)
        if improved is None:
            self.notify("Enhancement failed. Try again.")
            return False

        for name in ENHANCEABLE_FIELDS:
            if improved.get(name):
                self.editor.inputs[name] = improved[name]
        self.update_preview()
        self.notify("All fields enhanced!")
        return True

    def export_email(self) -> str:
        return mailto_url(self.editor.mode, self.editor.output)

    def export_slack(self) -> str:
        return slack_block(self.editor.output)

    # --------------------------------------------------------------------------
    ## 대시보드
    # --------------------------------------------------------------------------

    def begin_dashboard_refresh(self) -> int:
        """새 새로고침 번호를 발급합니다. 가장 최근 번호의 응답만 반영됩니다."""
        self._latest_ticket = next(self._tickets)
        return self._latest_ticket

    def apply_dashboard_data(self, ticket: int, drafts: List[Dict[str, Any]]) -> bool:
        if ticket != self._latest_ticket:
            logger.debug("Discarding stale dashboard response #%d (latest #%d)", ticket, self._latest_ticket)
            return False
        self.dashboard.drafts = list(drafts)
        self.dashboard.applied_ticket = ticket
        return True

    def load_dashboard_data(self) -> bool:
        ticket = self.begin_dashboard_refresh()
        result = self.api.get_history(DASHBOARD_LIMIT)
        if result.get("error"):
            self.notify("Failed to load drafts.")
            return False
        return self.apply_dashboard_data(ticket, result.get("data") or [])

    def set_filters(self, **changes) -> List[dashboard.DashboardRow]:
        self.dashboard.filters = replace(self.dashboard.filters, **changes)
        return self.render_dashboard()

    def render_dashboard(self, now: Optional[datetime] = None) -> List[dashboard.DashboardRow]:
        return dashboard.build_rows(self.dashboard.drafts, self.dashboard.filters, now, self.tz)

    def dispatch(self, action: str, draft_id: int) -> bool:
        """대시보드 행의 동작을 draft_id 기준으로 처리합니다."""
        draft = next((d for d in self.dashboard.drafts if d.get("id") == draft_id), None)
        if draft is None:
            return False

        if action == "load":
            # 구조화된 필드는 복원할 수 없고 본문 텍스트만 불러옴
            self.set_mode(draft.get("type") or "daily")
            self.editor.output = draft.get("content") or ""
            self.notify("Draft Loaded! (Note: Only Preview is restored)")
            return True

        if action == "delete":
            result = self.api.delete_draft(draft_id)
            if result.get("message") != "deleted":
                self.notify("Delete failed")
                return False
            self.notify("Draft deleted")
            self.load_dashboard_data()
            return True

        raise ValueError(f"Unknown dashboard action '{action}'.")

    # --------------------------------------------------------------------------
    ## 프로젝트 / 역할 관리
    # --------------------------------------------------------------------------

    def load_projects(self) -> List[Dict[str, Any]]:
        result = self.api.get_projects()
        if result.get("data") is not None:
            self.projects = result["data"]
        return self.projects

    def add_project(self, name: str) -> bool:
        name = (name or "").strip()
        if not name:
            return False
        result = self.api.create_project(name)
        if result.get("error"):
            self.notify(f"Failed to add project: {result['error']}")
            return False
        self.load_projects()
        self.notify("Project Added")
        return True

    def remove_project(self, project_id: int):
        self.api.delete_project(project_id)
        if self.editor.project_id == project_id:
            self.editor.project_id = None
            self.editor.role_id = None
            self.roles = []
        self.load_projects()

    def add_role(self, name: str) -> bool:
        name = (name or "").strip()
        if not name or self.editor.project_id is None:
            return False
        result = self.api.create_role(name, self.editor.project_id)
        if result.get("error"):
            self.notify(f"Failed to add role: {result['error']}")
            return False
        self.select_project(self.editor.project_id)
        self.notify("Role Added")
        return True

    def remove_role(self, role_id: int):
        self.api.delete_role(role_id)
        if self.editor.project_id is not None:
            self.roles = self.api.get_roles(self.editor.project_id).get("data") or []
