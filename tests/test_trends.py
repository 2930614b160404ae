from datetime import date, timedelta

from nutrition_engine.domain.trends import ExerciseEntry, WeightEntry
from nutrition_engine.services.reconciler import reconcile_daily_summary
from nutrition_engine.services.trends import TrendService, build_trend_series
from tests.conftest import (
    SESSION_ID,
    InMemoryDailySummaryRepository,
    InMemoryExerciseRepository,
    InMemoryWeightRepository,
    make_entry,
)

DAY_1 = date(2025, 7, 1)
DAY_2 = date(2025, 7, 2)
DAY_3 = date(2025, 7, 3)


def _summary(day: date, calories: float, protein: float = 0.0):
    return reconcile_daily_summary(
        None,
        [make_entry(f"{day}", calories, protein_g=protein)],
        "replace",
        session_id=SESSION_ID,
        day=day,
    )


def _weight(day: date, weight: float) -> WeightEntry:
    return WeightEntry(session_id=SESSION_ID, date=day, weight=weight)


def _exercise(day: date, calories_burned: float, name: str = "Running") -> ExerciseEntry:
    return ExerciseEntry(
        session_id=SESSION_ID,
        date=day,
        exercise_name=name,
        duration=30,
        calories_burned=calories_burned,
    )


def test_weight_carries_forward_and_missing_nutrition_is_zero() -> None:
    points = build_trend_series(
        [_summary(DAY_2, 1800, 70.0)],
        [_weight(DAY_1, 70.0)],
        [_exercise(DAY_3, 250)],
        14,
    )

    assert [point.date for point in points] == [DAY_1, DAY_2, DAY_3]
    assert points[0].calories == 0
    assert points[0].weight == 70.0
    assert points[1].calories == 1800
    assert points[1].protein == 70.0
    assert points[1].weight == 70.0
    assert points[2].calories_burned == 250
    assert points[2].weight == 70.0


def test_later_weight_sample_replaces_carried_value() -> None:
    points = build_trend_series(
        [],
        [_weight(DAY_1, 70.0), _weight(DAY_3, 69.4)],
        [_exercise(DAY_2, 100)],
        14,
    )
    assert [point.weight for point in points] == [70.0, 70.0, 69.4]


def test_exercise_is_summed_per_day() -> None:
    points = build_trend_series(
        [], [], [_exercise(DAY_1, 120), _exercise(DAY_1, 80, name="Yoga")], 14
    )
    assert len(points) == 1
    assert points[0].calories_burned == 200


def test_window_keeps_the_most_recent_dates() -> None:
    start = date(2025, 6, 1)
    summaries = [_summary(start + timedelta(days=offset), 1500) for offset in range(20)]

    points = build_trend_series(summaries, [], [], 7)

    assert len(points) == 7
    assert points[0].date == start + timedelta(days=13)
    assert points[-1].date == start + timedelta(days=19)


def test_weight_before_the_window_is_not_carried() -> None:
    start = date(2025, 6, 1)
    summaries = [_summary(start + timedelta(days=offset), 1500) for offset in range(1, 4)]

    points = build_trend_series(summaries, [_weight(start, 72.0)], [], 3)

    assert all(point.weight is None for point in points)


def test_rows_without_data_are_dropped() -> None:
    empty_day = reconcile_daily_summary(
        None, [], "replace", session_id=SESSION_ID, day=DAY_1
    )
    points = build_trend_series([empty_day, _summary(DAY_2, 900)], [], [], 14)

    assert [point.date for point in points] == [DAY_2]


def test_targets_are_attached_to_every_point() -> None:
    points = build_trend_series(
        [_summary(DAY_1, 900)], [], [], 14, target_calories=1800, target_protein=90
    )
    assert points[0].target_calories == 1800
    assert points[0].target_protein == 90


def test_empty_inputs_and_empty_window() -> None:
    assert build_trend_series([], [], [], 14) == []
    assert build_trend_series([_summary(DAY_1, 900)], [], [], 0) == []


def test_trend_service_reads_the_window_ending_on_the_given_day() -> None:
    summaries = InMemoryDailySummaryRepository()
    for day, calories in ((DAY_1, 1500), (DAY_2, 1700), (DAY_3, 1600)):
        summaries.put_daily_summary(_summary(day, calories))
    weights = InMemoryWeightRepository(weights=[_weight(DAY_1, 80.0)])
    exercises = InMemoryExerciseRepository(exercises=[_exercise(DAY_2, 300)])
    service = TrendService(
        summary_repository=summaries,
        weight_repository=weights,
        exercise_repository=exercises,
        window_days=14,
        target_calories=2200,
    )

    points = service.get_series(SESSION_ID, end=DAY_2)
    short = service.get_series(SESSION_ID, end=DAY_3, window_days=1)

    assert [point.date for point in points] == [DAY_1, DAY_2]
    assert points[1].weight == 80.0
    assert points[1].calories_burned == 300
    assert points[0].target_calories == 2200
    assert [point.date for point in short] == [DAY_3]
    assert short[0].weight is None
    assert service.get_series(SESSION_ID, end=DAY_3, window_days=0) == []
    assert service.get_series("other", end=DAY_3) == []
