"""
Tracker operations: the glue between validation, classification and storage.
"""
import logging

from pregnancy_bp.core import metrics
from pregnancy_bp.core.classifier import PREGNANCY, advisory_for, check_ruleset, classify
from pregnancy_bp.core.clock import SystemClock, format_iso_date, format_time_of_day
from pregnancy_bp.core.gestation import current_week
from pregnancy_bp.models.profile import UserProfile
from pregnancy_bp.models.reading import SITTING, Reading, new_reading_id
from pregnancy_bp.utils.validators import validate_profile, validate_reading

logger = logging.getLogger(__name__)


class ValidationFailed(Exception):
    """Submitted data was rejected; nothing was stored."""

    def __init__(self, errors):
        super().__init__('; '.join(errors))
        self.errors = errors


class TrackerService:
    """
    Operations for one signed-in identity.

    The reading and profile stores are injected; every mutation persists
    through them immediately.
    """

    def __init__(self, readings, profiles, clock=None, ruleset=PREGNANCY):
        self.readings = readings
        self.profiles = profiles
        self.clock = clock or SystemClock()
        self.ruleset = check_ruleset(ruleset)

    # Profile

    def get_profile(self):
        return self.profiles.load()

    def save_profile(self, data: dict) -> UserProfile:
        errors = validate_profile(data)
        if errors:
            raise ValidationFailed(errors)
        profile = UserProfile.from_dict(data)
        return self.profiles.save(profile)

    def clear_profile(self):
        self.profiles.clear()

    def current_week(self) -> int:
        """Live gestational week, always derived from the stored due date."""
        profile = self.profiles.load()
        return current_week(profile.due_date if profile else None, self.clock.now())

    # Readings

    def list_readings(self, limit=None):
        readings = self.readings.all()
        return readings[:limit] if limit is not None else readings

    def record_reading(self, data: dict) -> Reading:
        """Validate, classify and store a new reading. Raises ValidationFailed."""
        errors = validate_reading(data, self.ruleset)
        if errors:
            raise ValidationFailed(errors)

        now = self.clock.now()
        systolic = int(data['systolic'])
        diastolic = int(data['diastolic'])

        symptoms = []
        for symptom in data.get('symptoms') or []:
            if symptom not in symptoms:
                symptoms.append(symptom)

        reading = Reading(
            id=new_reading_id(),
            systolic=systolic,
            diastolic=diastolic,
            pulse=int(data['pulse']),
            date=data.get('date') or format_iso_date(now.date()),
            time=data.get('time') or format_time_of_day(now),
            notes=str(data.get('notes') or '').strip(),
            symptoms=symptoms,
            position=data.get('position') or SITTING,
            category=classify(systolic, diastolic, self.ruleset),
            pregnancy_week=self.current_week(),
        )
        self.readings.append(reading)
        logger.debug(f"Recorded reading {reading.id} ({reading.category})")
        return reading

    def delete_reading(self, reading_id) -> bool:
        return self.readings.remove(reading_id)

    def clear_readings(self):
        self.readings.clear()

    @staticmethod
    def advisory(reading):
        return advisory_for(reading.category)

    # Derived views

    def summary(self):
        return metrics.summarize(self.readings.all(), self.profiles.load(),
                                 self.clock.now(), self.ruleset)

    def chart(self, limit=metrics.CHART_WINDOW):
        return metrics.chart_series(self.readings.all(), limit)
