# services/comparison_service.py
"""
Build the three route variants shown on the result screen from a single
scoring call.

Only the safety variant is really scored. Shortest and balanced reuse the same
path and scale the safety counts; their scores are fixed (72 / 85) unless
VARIANT_SCORING is "derived", in which case the safety score is scaled by the
weighted multipliers instead.
"""

import math
from collections import namedtuple

from safeway.config import CCTV_WEIGHT, LIGHT_WEIGHT, VARIANT_SCORING, WALKING_SPEED_M_PER_MIN
from safeway.models.types import RouteMetrics, RouteVariant
from safeway.services.geospatial import estimate_minutes, format_distance, path_length_m

VariantRule = namedtuple("VariantRule", "variant cctv_factor light_factor fixed_score")

# safety first: it is always the recommended default
VARIANT_RULES = (
    VariantRule(RouteVariant.SAFETY, 1.0, 1.0, None),
    VariantRule(RouteVariant.SHORTEST, 0.6, 0.5, 72),
    VariantRule(RouteVariant.BALANCED, 0.8, 0.8, 85),
)


def scale_count(count, factor):
    # round first so 10 * 0.6 does not floor to 5
    return int(math.floor(round(count * factor, 6)))


def derived_score(score, rule, cctv_weight=CCTV_WEIGHT, light_weight=LIGHT_WEIGHT):
    factor = (rule.cctv_factor * cctv_weight + rule.light_factor * light_weight) / (cctv_weight + light_weight)
    return min(100, int(math.floor(score * factor + 0.5)))


def time_label(minutes):
    return f"{minutes}분"


def compare_variants(path, result, report_count=0, mode=VARIANT_SCORING,
                     rules=VARIANT_RULES, speed_m_per_min=WALKING_SPEED_M_PER_MIN):
    """Return a list of RouteMetrics, safety variant first."""
    meters = path_length_m(path)
    minutes = estimate_minutes(meters, speed_m_per_min)
    out = []
    for rule in rules:
        if rule.variant is RouteVariant.SAFETY:
            score = result.score
        elif mode == "derived" or rule.fixed_score is None:
            score = derived_score(result.score, rule)
        else:
            score = rule.fixed_score
        out.append(RouteMetrics(
            variant=rule.variant,
            score=score,
            distance_label=format_distance(meters),
            time_label=time_label(minutes),
            cctv_count=scale_count(result.cctv_count, rule.cctv_factor),
            light_count=scale_count(result.light_count, rule.light_factor),
            report_count=report_count,
            recommended=rule.variant is RouteVariant.SAFETY,
            estimated_minutes=minutes,
        ))
    return out
