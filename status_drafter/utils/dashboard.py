# status_drafter/utils/dashboard.py
"""
대시보드 조회 엔진.

GET /api/drafts 로 받은 Draft 목록 전체를 메모리에서 필터링 -> 정렬 -> 요약합니다.
필터 값이 바뀔 때마다 처음부터 다시 계산하며, 캐시나 증분 계산은 하지 않습니다.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

ALL = "all"
SUMMARY_MAX_LENGTH = 60
NO_DRAFTS_MESSAGE = "No drafts found."
ROW_ACTIONS = ("load", "delete")

_BANNER = re.compile(r"Daily Update.*|Weekly Summary.*")


@dataclass(frozen=True)
class DashboardFilters:
    search: str = ""
    type: str = ALL
    project: Union[str, int] = ALL
    timeframe: str = ALL
    filter_date: Optional[Union[str, date]] = None
    sort: str = "desc"


@dataclass(frozen=True)
class DashboardRow:
    """
    대시보드 테이블의 한 행입니다. 행마다 draft_id를 들고 있어서
    오케스트레이터가 (action, draft_id)로 동작을 처리합니다.
    placeholder 행은 결과가 비었을 때 하나만 만들어지며 draft_id가 없습니다.
    """
    draft_id: Optional[int]
    date: str
    type: str
    summary: str
    project_name: str = ""
    actions: Tuple[str, ...] = ROW_ACTIONS
    placeholder: bool = False


def parse_timestamp(value: Any, tz: Optional[tzinfo] = None) -> datetime:
    """
    created_at 값을 비교 가능한 naive 로컬 시각으로 바꿉니다.
    오프셋이 있는 값은 tz(기본: 시스템 로컬)로 변환하고, naive 값은 이미 로컬로 간주합니다.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz).replace(tzinfo=None)
    return parsed


def start_of_week(now: datetime) -> datetime:
    """now가 속한 주의 월요일 00:00:00을 반환합니다. (일요일은 7)"""
    monday = now.date() - timedelta(days=now.isoweekday() - 1)
    return datetime.combine(monday, datetime.min.time())


def _as_date(value: Union[str, date]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


# --------------------------------------------------------------------------
## 필터 (서로 독립적이며 적용 순서와 무관)
# --------------------------------------------------------------------------

def matches_search(draft: Mapping[str, Any], search: str) -> bool:
    needle = (search or "").lower()
    if not needle:
        return True
    haystacks = [draft.get("content") or "", draft.get("type") or "", draft.get("project_name") or ""]
    return any(needle in text.lower() for text in haystacks)


def matches_type(draft: Mapping[str, Any], draft_type: str) -> bool:
    return draft_type == ALL or draft.get("type") == draft_type


def matches_project(draft: Mapping[str, Any], project: Union[str, int]) -> bool:
    if project == ALL:
        return True
    project_id = draft.get("project_id")
    if project_id is None:
        return False
    try:
        return int(project_id) == int(project)
    except (TypeError, ValueError):
        return False


def matches_timeframe(draft: Mapping[str, Any], timeframe: str, now: datetime,
                      filter_date: Optional[Union[str, date]] = None,
                      tz: Optional[tzinfo] = None) -> bool:
    if timeframe == ALL:
        return True

    created_at = parse_timestamp(draft["created_at"], tz)
    this_week = start_of_week(now)

    if timeframe == "this_week":
        return created_at >= this_week
    if timeframe == "last_week":
        return this_week - timedelta(days=7) <= created_at < this_week
    if timeframe == "custom":
        if not filter_date:
            return True
        return created_at.date() == _as_date(filter_date)
    raise ValueError(f"Unknown timeframe '{timeframe}'.")


def filter_drafts(drafts: Iterable[Mapping[str, Any]], filters: DashboardFilters,
                  now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> List[Mapping[str, Any]]:
    now = now or datetime.now(tz).replace(tzinfo=None)
    return [
        draft for draft in drafts
        if matches_search(draft, filters.search)
        and matches_type(draft, filters.type)
        and matches_project(draft, filters.project)
        and matches_timeframe(draft, filters.timeframe, now, filters.filter_date, tz)
    ]


def sort_drafts(drafts: Iterable[Mapping[str, Any]], order: str = "desc",
                tz: Optional[tzinfo] = None) -> List[Mapping[str, Any]]:
    # sorted()는 reverse=True에서도 안정 정렬이므로 같은 시각의 Draft는 순서가 유지됨
    return sorted(drafts, key=lambda d: parse_timestamp(d["created_at"], tz), reverse=(order == "desc"))


# --------------------------------------------------------------------------
## 요약
# --------------------------------------------------------------------------

def summarize(content: Optional[str], max_length: int = SUMMARY_MAX_LENGTH) -> str:
    """
    Draft 본문에서 목록에 표시할 짧은 제목을 뽑습니다.

    'Task:' 줄 -> 'Highlight:' 줄 -> 배너를 지운 첫 줄 -> 두 번째 줄 순서로 찾고,
    max_length를 넘으면 잘라서 '...'을 붙입니다.
    """
    lines = (content or "").split("\n")

    task_line = next((line for line in lines if line.startswith("Task:")), None)
    highlight_line = next((line for line in lines if line.startswith("Highlight:")), None)

    if task_line is not None:
        summary = task_line.replace("Task:", "", 1).strip()
    elif highlight_line is not None:
        summary = highlight_line.replace("Highlight:", "", 1).strip()
    else:
        summary = _BANNER.sub("", lines[0], count=1).strip()
        if not summary:
            summary = lines[1] if len(lines) > 1 and lines[1] else "Untitled"

    if len(summary) > max_length:
        summary = summary[:max_length] + "..."
    return summary


def build_rows(drafts: Iterable[Mapping[str, Any]], filters: DashboardFilters,
               now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> List[DashboardRow]:
    """
    필터 -> 정렬 -> 요약 파이프라인 전체를 실행해 테이블 행을 만듭니다.
    결과가 비어 있으면 "No drafts found." placeholder 행 하나를 반환합니다.
    """
    visible = sort_drafts(filter_drafts(drafts, filters, now, tz), filters.sort, tz)
    if not visible:
        return [DashboardRow(draft_id=None, date="", type="", summary=NO_DRAFTS_MESSAGE,
                             actions=(), placeholder=True)]

    return [
        DashboardRow(
            draft_id=draft.get("id"),
            date=parse_timestamp(draft["created_at"], tz).strftime("%d/%m/%Y"),
            type=draft.get("type") or "",
            summary=summarize(draft.get("content")),
            project_name=draft.get("project_name") or "",
        )
        for draft in visible
    ]
