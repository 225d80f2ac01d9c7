from safeway.models.types import RouteVariant, ScoreResult
from safeway.services.comparison_service import compare_variants, scale_count

from conftest import CITY_HALL_PATH


def test_shortest_and_balanced_are_scaled_with_fixed_scores():
    metrics = compare_variants(CITY_HALL_PATH, ScoreResult(78, 5, 10), mode="fixed")
    by_name = {m.variant: m for m in metrics}

    safety = by_name[RouteVariant.SAFETY]
    assert (safety.score, safety.cctv_count, safety.light_count) == (78, 5, 10)

    shortest = by_name[RouteVariant.SHORTEST]
    assert (shortest.score, shortest.cctv_count, shortest.light_count) == (72, 3, 5)

    balanced = by_name[RouteVariant.BALANCED]
    assert (balanced.score, balanced.cctv_count, balanced.light_count) == (85, 4, 8)


def test_safety_is_first_and_recommended():
    metrics = compare_variants(CITY_HALL_PATH, ScoreResult(40, 1, 1))
    assert [m.variant for m in metrics] == [RouteVariant.SAFETY, RouteVariant.SHORTEST, RouteVariant.BALANCED]
    assert [m.recommended for m in metrics] == [True, False, False]


def test_derived_mode_scales_the_safety_score():
    metrics = compare_variants(CITY_HALL_PATH, ScoreResult(78, 5, 10), mode="derived")
    scores = [m.score for m in metrics]
    # shortest: 78 * (0.6*5 + 0.5*2) / 7, balanced: 78 * 0.8
    assert scores == [78, 45, 62]


def test_all_variants_share_the_path_labels():
    metrics = compare_variants(CITY_HALL_PATH, ScoreResult(78, 5, 10), report_count=2)
    assert len({(m.distance_label, m.time_label) for m in metrics}) == 1
    assert metrics[0].time_label == "1분"
    assert all(m.report_count == 2 for m in metrics)
    assert [m.variant.value for m in metrics] == ["safety", "shortest", "balanced"]


def test_scale_count_floors_without_float_noise():
    assert scale_count(10, 0.6) == 6
    assert scale_count(3, 0.6) == 1
    assert scale_count(0, 0.8) == 0
