"""
Input validation for readings and onboarding.
"""
import re
from datetime import datetime

from pregnancy_bp.core.classifier import PREGNANCY, VITAL_RANGES
from pregnancy_bp.core.gestation import MAX_WEEK, MIN_WEEK
from pregnancy_bp.models.profile import REMINDER_CHOICES, parse_yes_no
from pregnancy_bp.models.reading import POSITIONS, SYMPTOMS

VITAL_NAMES = {
    'systolic': 'Systolic',
    'diastolic': 'Diastolic',
    'pulse': 'Pulse',
}

MAX_NOTES_LENGTH = 1000
MAX_TEXT_LENGTH = 500


def _check_int_range(data, field, label, low, high, errors):
    value = data.get(field)
    if value is None or value == '':
        errors.append(f'{label} is required')
        return
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        errors.append(f'{label} must be an integer')
        return
    try:
        v = int(value)
    except (ValueError, TypeError):
        errors.append(f'{label} must be an integer')
        return
    if v < low or v > high:
        errors.append(f'{label} must be between {low} and {high}')


def validate_reading(data: dict, ruleset: str = PREGNANCY) -> list:
    """Validate blood pressure reading input. Returns list of error strings."""
    errors = []

    for field, (low, high) in VITAL_RANGES[ruleset].items():
        _check_int_range(data, field, VITAL_NAMES[field], low, high, errors)

    date = data.get('date')
    if date is not None and date != '':
        if not re.match(r'^\d{4}-\d{2}-\d{2}$', str(date)):
            errors.append('Date must be in YYYY-MM-DD format')
        else:
            try:
                datetime.strptime(str(date), '%Y-%m-%d')
            except ValueError:
                errors.append('Date is not a valid date')

    time = data.get('time')
    if time is not None and time != '':
        if not re.match(r'^\d{2}:\d{2}$', str(time)):
            errors.append('Time must be in HH:MM format')
        else:
            try:
                datetime.strptime(str(time), '%H:%M')
            except ValueError:
                errors.append('Time is not a valid time')

    position = data.get('position')
    if position not in (None, '') and position not in POSITIONS:
        errors.append(f"Position must be one of: {', '.join(POSITIONS)}")

    symptoms = data.get('symptoms')
    if symptoms is not None:
        if not isinstance(symptoms, list):
            errors.append('Symptoms must be a list')
        else:
            unknown = [s for s in symptoms if s not in SYMPTOMS]
            if unknown:
                errors.append(f"Unknown symptom(s): {', '.join(str(s) for s in unknown)}")

    notes = data.get('notes')
    if notes is not None and len(str(notes)) > MAX_NOTES_LENGTH:
        errors.append(f'Notes must be {MAX_NOTES_LENGTH} characters or fewer')

    return errors


def validate_profile(data: dict) -> list:
    """Validate onboarding input. Returns list of error strings (empty = valid)."""
    errors = []

    # Step 1: basic information
    name = str(data.get('name') or '').strip()
    if not name:
        errors.append('Name is required')
    elif len(name) > 200:
        errors.append('Name must be 200 characters or fewer')

    due_date = data.get('dueDate')
    if not due_date:
        errors.append('Due date is required')
    elif not re.match(r'^\d{4}-\d{2}-\d{2}$', str(due_date)):
        errors.append('Due date must be in YYYY-MM-DD format')
    else:
        try:
            datetime.strptime(str(due_date), '%Y-%m-%d')
        except ValueError:
            errors.append('Due date is not a valid date')

    # Step 2: pregnancy details
    _check_int_range(data, 'currentWeek', 'Current week', MIN_WEEK, MAX_WEEK, errors)

    if parse_yes_no(data.get('firstPregnancy')) is None:
        errors.append('First pregnancy must be yes or no')

    # Step 3: optional health information
    for field, label in (('preExistingConditions', 'Pre-existing conditions'),
                         ('currentMedications', 'Current medications'),
                         ('doctorName', 'Healthcare provider')):
        value = data.get(field)
        if value is not None and len(str(value)) > MAX_TEXT_LENGTH:
            errors.append(f'{label} must be {MAX_TEXT_LENGTH} characters or fewer')

    if data.get('preferredReminders') not in REMINDER_CHOICES + [None, '']:
        errors.append('Invalid reminder frequency')

    return errors
