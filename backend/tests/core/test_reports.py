"""Unit tests for report generation - pure functions, no mocks needed."""

from datetime import date

from src.core.models import DayRecord, DayStatus, ProgressPoint
from src.core.reports import (
    build_history,
    build_month_view,
    build_progress_series,
    build_week_view,
    parse_decimal,
    parse_integer,
    summarize_progress,
)


def done_day(**fields) -> DayRecord:
    """A complete day, with extra fields set."""
    base = {"training": "Séance A (Squat/Poussée)", "hydration": True, "fasting": "16/8"}
    base.update(fields)
    return DayRecord(**base)


class TestParsing:
    """Tests for parse_decimal and parse_integer."""

    def test_decimal(self):
        """Plain decimal text parses."""
        assert parse_decimal("92.5") == 92.5

    def test_decimal_with_suffix(self):
        """Trailing text after the number is ignored."""
        assert parse_decimal("92.5kg") == 92.5

    def test_decimal_garbage(self):
        """Text not starting with a number does not parse."""
        assert parse_decimal("abc") is None
        assert parse_decimal("nan") is None

    def test_integer_with_suffix(self):
        """Steps keep the leading integer."""
        assert parse_integer("8000 pas") == 8000

    def test_integer_truncates_decimals(self):
        """Decimal steps keep their integer part."""
        assert parse_integer("8000.7") == 8000

    def test_integer_garbage(self):
        """Non-numeric steps do not parse."""
        assert parse_integer("beaucoup") is None


class TestWeightSeries:
    """Tests for the weight progress series."""

    def test_excludes_empty_includes_numeric(self):
        """Empty weight is skipped, '92.5' becomes 92.5."""
        store = {
            "2024-01-08": DayRecord(weight="92.5"),
            "2024-01-09": DayRecord(weight=""),
        }
        points = build_progress_series(store, "weight")
        assert points == [ProgressPoint(label="08 janv.", value=92.5)]

    def test_sorted_by_date(self):
        """Points follow dates, not insertion order."""
        store = {
            "2024-01-15": DayRecord(weight="91"),
            "2024-01-08": DayRecord(weight="92.5"),
        }
        points = build_progress_series(store, "weight")
        assert [p.value for p in points] == [92.5, 91.0]

    def test_unparseable_skipped(self):
        """Non-numeric weight does not break the series."""
        store = {
            "2024-01-08": DayRecord(weight="heavy"),
            "2024-01-15": DayRecord(weight="91"),
        }
        points = build_progress_series(store, "weight")
        assert [p.value for p in points] == [91.0]

    def test_bad_date_keys_skipped(self):
        """Records under malformed keys are ignored."""
        store = {"not-a-date": DayRecord(weight="91")}
        assert build_progress_series(store, "weight") == []


class TestStepsSeries:
    """Tests for the steps progress series."""

    def test_integer_values(self):
        """Steps parse as integers."""
        store = {
            "2024-01-09": DayRecord(steps="10000"),
            "2024-01-08": DayRecord(steps="8000 pas"),
            "2024-01-10": DayRecord(steps=""),
        }
        points = build_progress_series(store, "steps")
        assert [(p.label, p.value) for p in points] == [("08 janv.", 8000), ("09 janv.", 10000)]


class TestTrainingSeries:
    """Tests for the training progress series.

    Sessions are grouped by formatted day label, not by week.
    """

    def test_one_point_per_day(self):
        """Each training day is its own point with count 1."""
        store = {
            "2024-01-08": DayRecord(training="A"),
            "2024-01-10": DayRecord(training="B"),
            "2024-01-09": DayRecord(),
        }
        points = build_progress_series(store, "training")
        assert [(p.label, p.value) for p in points] == [("08 janv.", 1), ("10 janv.", 1)]

    def test_same_label_in_different_years_merges(self):
        """Grouping by label merges the same day of different years."""
        store = {
            "2023-01-08": DayRecord(training="A"),
            "2024-01-08": DayRecord(training="B"),
        }
        points = build_progress_series(store, "training")
        assert points == [ProgressPoint(label="08 janv.", value=2)]


class TestFastingSeries:
    """Tests for the fasting progress series."""

    def test_counts_by_type_in_first_seen_order(self):
        """Fasting days are counted per type, first type seen first."""
        store = {
            "2024-01-10": DayRecord(fasting="16/8"),
            "2024-01-08": DayRecord(fasting="OMAD"),
            "2024-01-09": DayRecord(fasting="16/8"),
            "2024-01-11": DayRecord(),
        }
        points = build_progress_series(store, "fasting")
        assert [(p.label, p.value) for p in points] == [("OMAD", 1), ("16/8", 2)]


class TestUnknownMetric:
    """Tests for unrecognized metric selectors."""

    def test_returns_empty(self):
        """An unknown metric gives an empty series."""
        store = {"2024-01-08": DayRecord(weight="92")}
        assert build_progress_series(store, "calories") == []


class TestSummarizeProgress:
    """Tests for summarize_progress."""

    def test_weight_lost(self):
        """Weight summary is first minus last."""
        points = [ProgressPoint(label="a", value=130), ProgressPoint(label="b", value=127.45)]
        assert summarize_progress(points, "weight").value == 2.5

    def test_weight_needs_two_points(self):
        """A single weigh-in has no summary."""
        summary = summarize_progress([ProgressPoint(label="a", value=130)], "weight")
        assert summary.value is None
        assert summary.points == 1

    def test_steps_average(self):
        """Steps summary is the rounded average."""
        points = [ProgressPoint(label="a", value=8000), ProgressPoint(label="b", value=9001)]
        assert summarize_progress(points, "steps").value == 8501

    def test_counts_total(self):
        """Training and fasting summaries are totals."""
        points = [ProgressPoint(label="OMAD", value=2), ProgressPoint(label="16/8", value=3)]
        assert summarize_progress(points, "fasting").value == 5
        assert summarize_progress(points, "training").value == 5

    def test_empty_series(self):
        """No points, no value."""
        assert summarize_progress([], "steps").value is None


class TestBuildWeekView:
    """Tests for build_week_view."""

    def test_days_and_statuses(self):
        """Seven days from Monday with their statuses."""
        store = {
            "2024-01-08": done_day(weight="92.5"),
            "2024-01-09": DayRecord(),
        }
        view = build_week_view(store, 0, today=date(2024, 1, 10))

        assert view.title == "Semaine du 8 janvier"
        assert [d.day_label for d in view.days][:2] == ["lun.", "mar."]
        assert view.days[0].status == DayStatus.COMPLETE
        assert view.days[0].weight == "92.5"
        assert view.days[1].status == DayStatus.INCOMPLETE
        assert view.days[2].status == DayStatus.EMPTY
        assert view.days[2].is_today is True
        assert view.can_go_forward is False

    def test_past_week(self):
        """Past weeks can page forward."""
        view = build_week_view({}, -1, today=date(2024, 1, 10))
        assert view.days[0].date_key == "2024-01-01"
        assert view.can_go_forward is True
        assert not any(d.is_today for d in view.days)


class TestBuildMonthView:
    """Tests for build_month_view."""

    def test_grid_and_padding(self):
        """42 days, padding flagged outside the month."""
        view = build_month_view({}, 0, today=date(2024, 2, 10))

        assert view.title == "février 2024"
        assert view.headers == ["Lun", "Mar", "Mer", "Jeu", "Ven", "Sam", "Dim"]
        assert len(view.days) == 42
        assert view.days[0].date_key == "2024-01-29"
        assert view.days[0].in_month is False
        assert view.days[3].date_key == "2024-02-01"
        assert view.days[3].in_month is True
        assert view.days[-1].in_month is False

    def test_month_across_year(self):
        """Paging back from January lands in December of the year before."""
        view = build_month_view({"2023-12-25": done_day()}, -1, today=date(2024, 1, 15))
        assert (view.year, view.month) == (2023, 12)
        christmas = next(d for d in view.days if d.date_key == "2023-12-25")
        assert christmas.status == DayStatus.COMPLETE
        assert christmas.in_month is True


class TestBuildHistory:
    """Tests for build_history."""

    def test_newest_first(self):
        """History lists stored days newest first."""
        store = {
            "2024-01-08": DayRecord(),
            "2024-01-10": DayRecord(),
            "2024-01-09": DayRecord(),
        }
        keys = [item.date_key for item in build_history(store)]
        assert keys == ["2024-01-10", "2024-01-09", "2024-01-08"]

    def test_summary_fields(self):
        """Training label is shortened, status and details are kept."""
        store = {"2024-01-08": done_day(weight="92.5", mood=["💪"], comments="ok")}
        item = build_history(store)[0]

        assert item.status == DayStatus.COMPLETE
        assert item.training == "Séance A"
        assert item.weight == "92.5"
        assert item.fasting == "16/8"
        assert item.hydration is True
        assert item.mood == ["💪"]
        assert item.comments == "ok"

    def test_long_comment_cut(self):
        """Comments over 80 characters are cut and marked with an ellipsis."""
        store = {"2024-01-08": DayRecord(comments="x" * 81)}
        assert build_history(store)[0].comments == "x" * 80 + "..."

    def test_short_comment_kept(self):
        """Comments of 80 characters or fewer are shown whole."""
        store = {"2024-01-08": DayRecord(comments="y" * 80)}
        assert build_history(store)[0].comments == "y" * 80

    def test_empty_store(self):
        """No records, no history."""
        assert build_history({}) == []
