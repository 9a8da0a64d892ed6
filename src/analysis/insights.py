################################################################################
# File Name: insights.py
# Purpose/Description: Rule-based coaching insights from trips and telemetry
# Author: Michael Cornelison
# Creation Date: 2026-02-10
# Copyright: (c) 2026 Eclipse OBD-II Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-02-10    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################

"""
Coaching insight generation.

Evaluates a fixed, ordered rule set over recent trips and telemetry:

1. Average eco score below 60 (warning) or above 80 (success)
2. Average fuel consumption above 10 L/100km (warning)
3. More than 30% of RPM readings above 3000 (tip)
4. More than 20% of throttle readings above 80% (tip)
5. Fallback "Good Progress" when nothing else fired

Rules are independent and several may fire; output order is rule order.

Usage:
    from analysis.insights import generate

    for insight in generate(recentTrips, recentTelemetry):
        print(insight.title)
"""

import logging
from collections.abc import Sequence

from .calculations import calculateRatio, meanOrNone
from .types import (
    Insight,
    InsightKind,
    InsightPriority,
    TelemetrySample,
    TripSummary,
)

logger = logging.getLogger(__name__)

# ================================================================================
# Rule Thresholds
# ================================================================================

LOW_ECO_SCORE_THRESHOLD = 60.0
EXCELLENT_ECO_SCORE_THRESHOLD = 80.0
HIGH_CONSUMPTION_THRESHOLD = 10.0      # L/100km
HIGH_RPM_THRESHOLD = 3000.0
HIGH_RPM_RATIO_THRESHOLD = 0.30
AGGRESSIVE_THROTTLE_THRESHOLD = 80.0   # percent open
AGGRESSIVE_THROTTLE_RATIO_THRESHOLD = 0.20

# ================================================================================
# Insight Catalogue
# ================================================================================

LOW_ECO_SCORE = Insight(
    kind=InsightKind.WARNING,
    title='Low Eco Score',
    message=(
        'Your average eco score is below 60. Focus on smooth acceleration '
        'and braking to improve.'
    ),
    priority=InsightPriority.HIGH
)

EXCELLENT_DRIVING = Insight(
    kind=InsightKind.SUCCESS,
    title='Excellent Driving',
    message=(
        'Great job! Your eco score is consistently high. Keep up the good '
        'driving habits.'
    ),
    priority=InsightPriority.LOW
)

HIGH_FUEL_CONSUMPTION = Insight(
    kind=InsightKind.WARNING,
    title='High Fuel Consumption',
    message=(
        'Your fuel efficiency is above 10 L/100km. Consider adjusting your '
        'driving style.'
    ),
    priority=InsightPriority.MEDIUM
)

HIGH_RPM_DRIVING = Insight(
    kind=InsightKind.TIP,
    title='High RPM Driving',
    message=(
        "You're frequently driving at high RPM. Shift to higher gears earlier "
        "to improve efficiency."
    ),
    priority=InsightPriority.MEDIUM
)

AGGRESSIVE_ACCELERATION = Insight(
    kind=InsightKind.TIP,
    title='Aggressive Acceleration',
    message='Gentle acceleration can improve fuel efficiency by up to 20%.',
    priority=InsightPriority.MEDIUM
)

GOOD_PROGRESS = Insight(
    kind=InsightKind.INFO,
    title='Good Progress',
    message=(
        'Your driving patterns look good. Continue monitoring for further '
        'improvements.'
    ),
    priority=InsightPriority.LOW
)


# ================================================================================
# Rules
# ================================================================================

def _ecoScoreInsight(trips: Sequence[TripSummary]) -> Insight | None:
    avgEcoScore = meanOrNone(t.ecoScore for t in trips)
    if avgEcoScore is None:
        return None
    if avgEcoScore < LOW_ECO_SCORE_THRESHOLD:
        return LOW_ECO_SCORE
    if avgEcoScore > EXCELLENT_ECO_SCORE_THRESHOLD:
        return EXCELLENT_DRIVING
    return None


def _efficiencyInsight(trips: Sequence[TripSummary]) -> Insight | None:
    avgEfficiency = meanOrNone(t.efficiency for t in trips)
    if avgEfficiency is not None and avgEfficiency > HIGH_CONSUMPTION_THRESHOLD:
        return HIGH_FUEL_CONSUMPTION
    return None


def _highRpmInsight(telemetry: Sequence[TelemetrySample]) -> Insight | None:
    ratio = calculateRatio(
        (s.engineRPM for s in telemetry),
        lambda rpm: rpm > HIGH_RPM_THRESHOLD
    )
    if ratio is not None and ratio > HIGH_RPM_RATIO_THRESHOLD:
        return HIGH_RPM_DRIVING
    return None


def _throttleInsight(telemetry: Sequence[TelemetrySample]) -> Insight | None:
    ratio = calculateRatio(
        (s.throttlePosition for s in telemetry),
        lambda throttle: throttle > AGGRESSIVE_THROTTLE_THRESHOLD
    )
    if ratio is not None and ratio > AGGRESSIVE_THROTTLE_RATIO_THRESHOLD:
        return AGGRESSIVE_ACCELERATION
    return None


def generate(
    recentTrips: Sequence[TripSummary],
    recentTelemetry: Sequence[TelemetrySample]
) -> list[Insight]:
    """
    Generate coaching insights in fixed rule order.

    Args:
        recentTrips: Recent trip summaries (nullable ecoScore/efficiency)
        recentTelemetry: Recent telemetry rows (nullable RPM/throttle)

    Returns:
        Insights in rule order; exactly one "Good Progress" insight when no
        other rule fires (including when both inputs are empty)
    """
    insights: list[Insight] = []

    for rule in (_ecoScoreInsight, _efficiencyInsight):
        insight = rule(recentTrips)
        if insight is not None:
            insights.append(insight)

    for rule in (_highRpmInsight, _throttleInsight):
        insight = rule(recentTelemetry)
        if insight is not None:
            insights.append(insight)

    if not insights:
        insights.append(GOOD_PROGRESS)

    logger.debug(
        f"Generated {len(insights)} insights | trips={len(recentTrips)} | "
        f"telemetry={len(recentTelemetry)} | "
        f"titles={[i.title for i in insights]}"
    )
    return insights
