"""
Derived metrics over the reading collection.

All functions take readings in stored order (newest first). Windows count
entries in that order; the date/time fields are never used for windowing.
"""
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from pregnancy_bp.core.classifier import is_high_risk
from pregnancy_bp.core.gestation import current_week

AVERAGE_WINDOW = 7
CHART_WINDOW = 30


def _rounded_mean(values) -> int:
    mean = Decimal(sum(values)) / Decimal(len(values))
    return int(mean.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def averages(readings, window: int = AVERAGE_WINDOW):
    """Mean systolic/diastolic/pulse of the newest `window` readings, or None."""
    recent = list(readings)[:window]
    if not recent:
        return None

    return {
        'avg_systolic': _rounded_mean([r.systolic for r in recent]),
        'avg_diastolic': _rounded_mean([r.diastolic for r in recent]),
        'avg_pulse': _rounded_mean([r.pulse for r in recent]),
    }


def high_risk_count(readings) -> int:
    """Readings in stage2 or crisis across the whole collection."""
    return sum(1 for r in readings if is_high_risk(r.category))


def _chart_label(reading) -> str:
    try:
        return datetime.strptime(reading.date, '%Y-%m-%d').strftime('%m/%d')
    except ValueError:
        return reading.date


def chart_series(readings, limit: int = CHART_WINDOW):
    """Trend-chart points for the newest `limit` readings, oldest first."""
    recent = list(readings)[:limit]
    recent.reverse()
    return [
        {
            'label': _chart_label(r),
            'date': r.date,
            'time': r.time,
            'systolic': r.systolic,
            'diastolic': r.diastolic,
            'pulse': r.pulse,
            'week': r.pregnancy_week,
        }
        for r in recent
    ]


def summarize(readings, profile, now, ruleset):
    """Dashboard payload for the current reading collection."""
    readings = list(readings)
    high_risk = high_risk_count(readings)

    return {
        'ruleset': ruleset,
        'total_readings': len(readings),
        'averages': averages(readings),
        'high_risk_count': high_risk,
        'show_high_risk_banner': high_risk > 0,
        'current_week': current_week(profile.due_date if profile else None, now),
        'reported_week': profile.current_week if profile else None,
        'latest': readings[0].to_dict() if readings else None,
    }
