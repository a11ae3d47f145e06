# tests/utils/test_dashboard.py
from datetime import datetime, timezone, timedelta
from itertools import permutations

import pytest

from status_drafter.utils import dashboard
from status_drafter.utils.dashboard import DashboardFilters, build_rows, filter_drafts, sort_drafts, summarize

# 2024-03-13 (수) 12:00 -> 이번 주 월요일 2024-03-11, 지난주 2024-03-04 ~ 2024-03-10
NOW = datetime(2024, 3, 13, 12, 0)


def make_draft(draft_id, created_at, type="daily", content="Task: something", project_id=None, project_name=None):
    return {
        "id": draft_id,
        "type": type,
        "content": content,
        "project_id": project_id,
        "role_id": None,
        "project_name": project_name,
        "role_name": None,
        "created_at": created_at,
    }


@pytest.fixture
def drafts():
    return [
        make_draft(1, "2024-03-11T00:00:00", content="Task: Fix login bug", project_id=1, project_name="Website App"),
        make_draft(2, "2024-03-10T23:59:59", type="weekly", content="Weekly Summary (x)\nHighlight: Release", project_id=2, project_name="Android App"),
        make_draft(3, "2024-03-04T00:00:00", content="Task: Write docs", project_id=1, project_name="Website App"),
        make_draft(4, "2024-03-03T23:59:59", content="Task: Old work"),
        make_draft(5, "2024-03-15T08:00:00", type="weekly", content="Highlight: Future planning", project_id=None),
    ]


def ids(items):
    return [d["id"] for d in items]


class TestFilters:
    def test_search_is_case_insensitive_over_content_type_and_project(self, drafts):
        assert ids(filter_drafts(drafts, DashboardFilters(search="LOGIN"), NOW)) == [1]
        assert ids(filter_drafts(drafts, DashboardFilters(search="weekly"), NOW)) == [2, 5]
        assert ids(filter_drafts(drafts, DashboardFilters(search="android"), NOW)) == [2]

    def test_empty_search_matches_everything(self, drafts):
        assert ids(filter_drafts(drafts, DashboardFilters(), NOW)) == [1, 2, 3, 4, 5]

    def test_type_filter(self, drafts):
        assert ids(filter_drafts(drafts, DashboardFilters(type="weekly"), NOW)) == [2, 5]

    @pytest.mark.parametrize("project", [1, "1"])
    def test_project_filter_uses_numeric_identity(self, drafts, project):
        assert ids(filter_drafts(drafts, DashboardFilters(project=project), NOW)) == [1, 3]

    def test_project_filter_is_not_partial_match(self):
        items = [make_draft(1, "2024-03-11T00:00:00", project_id=1), make_draft(2, "2024-03-11T00:00:00", project_id=11)]
        assert ids(filter_drafts(items, DashboardFilters(project="1"), NOW)) == [1]

    def test_this_week_starts_monday_midnight(self, drafts):
        assert ids(filter_drafts(drafts, DashboardFilters(timeframe="this_week"), NOW)) == [1, 5]

    def test_last_week_window(self, drafts):
        assert ids(filter_drafts(drafts, DashboardFilters(timeframe="last_week"), NOW)) == [2, 3]

    def test_sunday_belongs_to_previous_monday_week(self, drafts):
        sunday = datetime(2024, 3, 17, 22, 0)
        assert ids(filter_drafts(drafts, DashboardFilters(timeframe="this_week"), sunday)) == [1, 5]

    def test_custom_date_ignores_time_of_day(self):
        items = [
            make_draft(1, "2024-03-15T00:00:01"),
            make_draft(2, "2024-03-15T23:59:59"),
            make_draft(3, "2024-03-16T00:00:00"),
            make_draft(4, "2024-03-14T23:59:59"),
        ]
        filters = DashboardFilters(timeframe="custom", filter_date="2024-03-15")
        assert ids(filter_drafts(items, filters, NOW)) == [1, 2]

    def test_custom_without_date_passes_everything(self, drafts):
        assert len(filter_drafts(drafts, DashboardFilters(timeframe="custom"), NOW)) == len(drafts)

    def test_aware_timestamps_are_converted_to_display_zone(self):
        """UTC 타임스탬프는 지정한 시간대로 변환된 뒤 날짜 비교에 쓰입니다."""
        seoul = timezone(timedelta(hours=9))
        items = [make_draft(1, "2024-03-14T20:00:00+00:00")]  # 서울 기준 03-15 05:00
        filters = DashboardFilters(timeframe="custom", filter_date="2024-03-15")
        assert ids(filter_drafts(items, filters, NOW, tz=seoul)) == [1]
        assert ids(filter_drafts(items, filters, NOW, tz=timezone.utc)) == []

    def test_predicates_commute(self, drafts):
        """네 가지 필터는 적용 순서와 관계없이 같은 결과를 냅니다."""
        predicates = [
            lambda d: dashboard.matches_search(d, "task"),
            lambda d: dashboard.matches_type(d, "daily"),
            lambda d: dashboard.matches_project(d, "1"),
            lambda d: dashboard.matches_timeframe(d, "last_week", NOW),
        ]
        results = set()
        for order in permutations(predicates):
            survivors = drafts
            for predicate in order:
                survivors = [d for d in survivors if predicate(d)]
            results.add(tuple(ids(survivors)))
        assert results == {(3,)}


class TestSort:
    def test_sort_directions(self, drafts):
        assert ids(sort_drafts(drafts, "desc")) == [5, 1, 2, 3, 4]
        assert ids(sort_drafts(drafts, "asc")) == [4, 3, 2, 1, 5]

    @pytest.mark.parametrize("order", ["asc", "desc"])
    def test_sort_is_stable_for_equal_timestamps(self, order):
        items = [make_draft(i, "2024-03-12T10:00:00") for i in (7, 3, 9)]
        assert ids(sort_drafts(items, order)) == [7, 3, 9]


class TestSummarize:
    def test_task_line(self):
        assert summarize("[Dana] Daily Update - 15/03/2024\n\nTask: Fix login bug\nStatus: Done") == "Fix login bug"

    def test_highlight_line(self):
        assert summarize("Weekly Summary (12/03/2024)\nHighlight: Launched beta") == "Launched beta"

    def test_task_wins_over_highlight(self):
        assert summarize("Highlight: second\nTask: first") == "first"

    def test_falls_back_to_cleaned_first_line(self):
        assert summarize("Quick note about the release\nmore text") == "Quick note about the release"

    def test_banner_only_first_line_uses_second_line(self):
        assert summarize("Weekly Summary (This Week)\nAuthor: Dana") == "Author: Dana"

    def test_empty_content(self):
        assert summarize("") == "Untitled"
        assert summarize(None) == "Untitled"

    def test_truncates_to_sixty_chars(self):
        summary = summarize("Task: " + "x" * 80)
        assert summary == "x" * 60 + "..."

    def test_exactly_sixty_chars_is_not_truncated(self):
        assert summarize("Task: " + "y" * 60) == "y" * 60


class TestBuildRows:
    def test_rows_carry_ids_and_display_values(self, drafts):
        rows = build_rows(drafts, DashboardFilters(project=1, sort="asc"), NOW)

        assert [row.draft_id for row in rows] == [3, 1]
        first = rows[0]
        assert first.date == "04/03/2024"
        assert first.type == "daily"
        assert first.summary == "Write docs"
        assert first.project_name == "Website App"
        assert first.actions == ("load", "delete")
        assert first.placeholder is False

    def test_missing_project_name_renders_blank(self, drafts):
        rows = build_rows(drafts, DashboardFilters(search="Old work"), NOW)
        assert rows[0].project_name == ""

    def test_empty_result_yields_placeholder_row(self, drafts):
        rows = build_rows(drafts, DashboardFilters(search="no such text"), NOW)

        assert len(rows) == 1
        assert rows[0].placeholder is True
        assert rows[0].draft_id is None
        assert rows[0].summary == "No drafts found."
        assert rows[0].actions == ()

    def test_input_is_not_mutated(self, drafts):
        before = [dict(d) for d in drafts]
        build_rows(drafts, DashboardFilters(sort="asc"), NOW)
        assert drafts == before
