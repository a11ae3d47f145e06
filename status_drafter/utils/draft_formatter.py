# status_drafter/utils/draft_formatter.py
from datetime import date, timedelta
from typing import Mapping, Any, Optional
from urllib.parse import quote

DIVIDER = "━" * 26
FIELD_NAMES = ("userName", "dateRange", "taskTitle", "progressStatus", "taskDesc", "blockers", "nextSteps")


def format_date(value: date) -> str:
    """날짜를 DD/MM/YYYY 문자열로 변환합니다."""
    return value.strftime("%d/%m/%Y")


def week_bounds(today: date):
    """이번 주 월요일과 금요일을 반환합니다. 일요일은 7로 취급하여 직전 월요일 주에 속합니다."""
    monday = today - timedelta(days=today.isoweekday() - 1)
    return monday, monday + timedelta(days=4)


def default_date_range(mode: str, today: Optional[date] = None) -> str:
    """
    입력 폼의 날짜 기본값을 계산합니다.

    - daily: 오늘 날짜 (DD/MM/YYYY)
    - weekly: 이번 주 월요일 ~ 금요일 (DD/MM/YYYY - DD/MM/YYYY)
    """
    today = today or date.today()
    if mode == "weekly":
        monday, friday = week_bounds(today)
        return f"{format_date(monday)} - {format_date(friday)}"
    return format_date(today)


def _field(fields: Mapping[str, Any], name: str) -> str:
    value = fields.get(name)
    return "" if value is None else str(value)


def format_daily(fields: Mapping[str, Any], today: Optional[date] = None) -> str:
    report_date = _field(fields, "dateRange") or format_date(today or date.today())
    user_name = _field(fields, "userName")
    blockers = _field(fields, "blockers")

    name_part = f"[{user_name}] " if user_name else ""
    blocker_text = f"\nBlockers: {blockers}" if blockers else ""

    return (
        f"{name_part}Daily Update - {report_date}\n"
        f"\n"
        f"Task: {_field(fields, 'taskTitle')}\n"
        f"Status: {_field(fields, 'progressStatus')}\n"
        f"\n"
        f"Done / In Progress:\n"
        f"{_field(fields, 'taskDesc')}\n"
        f"{blocker_text}\n"
        f"Next Steps:\n"
        f"{_field(fields, 'nextSteps')}"
    )


def format_weekly(fields: Mapping[str, Any], today: Optional[date] = None) -> str:
    date_range = _field(fields, "dateRange") or "This Week"
    user_name = _field(fields, "userName")
    name_part = f"Author: {user_name}\n" if user_name else ""

    return (
        f"Weekly Summary ({date_range})\n"
        f"{name_part}\n"
        f"{DIVIDER}\n"
        f"Key Highlight:\n"
        f"{_field(fields, 'taskTitle')}\n"
        f"\n"
        f"Work Accomplished:\n"
        f"{_field(fields, 'taskDesc')}\n"
        f"\n"
        f"Challenges / Blockers:\n"
        f"{_field(fields, 'blockers') or 'None'}\n"
        f"\n"
        f"Focus for Next Week:\n"
        f"{_field(fields, 'nextSteps')}\n"
        f"{DIVIDER}"
    )


FORMATTERS = {
    "daily": format_daily,
    "weekly": format_weekly,
}


def format_draft(mode: str, fields: Mapping[str, Any], today: Optional[date] = None) -> str:
    """
    입력 필드를 모드별 템플릿으로 렌더링합니다.
    같은 입력과 같은 today에 대해 항상 같은 결과를 반환하는 순수 함수입니다.

    Raises:
        ValueError: 알 수 없는 모드일 때.
    """
    try:
        formatter = FORMATTERS[mode]
    except KeyError:
        raise ValueError(f"Unknown draft mode '{mode}'.")
    return formatter(fields, today)


# --------------------------------------------------------------------------
## 내보내기 (Email / Slack)
# --------------------------------------------------------------------------

def email_subject(mode: str) -> str:
    return "Daily Update" if mode == "daily" else "Weekly Summary"


def mailto_url(mode: str, text: str) -> str:
    return f"mailto:?subject={quote(email_subject(mode))}&body={quote(text, safe='')}"


def slack_block(text: str) -> str:
    return f"```\n{text}\n```"


def blockers_visible(fields: Mapping[str, Any]) -> bool:
    """상태가 'Blocked'이거나 blockers 내용이 있으면 Blockers 입력란을 보여줍니다."""
    return _field(fields, "progressStatus") == "Blocked" or bool(_field(fields, "blockers"))
