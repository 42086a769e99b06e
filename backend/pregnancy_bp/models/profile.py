"""
Onboarding profile.
"""
from pregnancy_bp.core.clock import format_iso_date, parse_iso_date

REMINDER_CHOICES = ['daily', 'twice-daily', 'weekly', 'none']
DEFAULT_REMINDER = 'daily'


class UserProfile:
    """
    Context collected during onboarding. Stored as a single record and
    replaced wholesale when onboarding is re-run.

    current_week is the week the user reported at onboarding; the live week
    is always derived from due_date.
    """

    def __init__(self, name, due_date, current_week, first_pregnancy,
                 pre_existing_conditions='', current_medications='',
                 doctor_name='', preferred_reminders=DEFAULT_REMINDER):
        self.name = name
        self.due_date = due_date
        self.current_week = current_week
        self.first_pregnancy = first_pregnancy
        self.pre_existing_conditions = pre_existing_conditions or ''
        self.current_medications = current_medications or ''
        self.doctor_name = doctor_name or ''
        self.preferred_reminders = preferred_reminders or DEFAULT_REMINDER

    def to_dict(self):
        return {
            'name': self.name,
            'dueDate': format_iso_date(self.due_date) if self.due_date else None,
            'currentWeek': self.current_week,
            'firstPregnancy': self.first_pregnancy,
            'preExistingConditions': self.pre_existing_conditions,
            'currentMedications': self.current_medications,
            'doctorName': self.doctor_name,
            'preferredReminders': self.preferred_reminders,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'UserProfile':
        """Build from the stored (or already validated request) form."""
        due_date = data.get('dueDate')
        current_week = data.get('currentWeek')
        return cls(
            name=str(data['name']).strip(),
            due_date=parse_iso_date(due_date) if due_date else None,
            current_week=int(current_week) if current_week not in (None, '') else None,
            first_pregnancy=parse_yes_no(data.get('firstPregnancy')),
            pre_existing_conditions=data.get('preExistingConditions'),
            current_medications=data.get('currentMedications'),
            doctor_name=data.get('doctorName'),
            preferred_reminders=data.get('preferredReminders'),
        )

    def __repr__(self):
        return f'<UserProfile {self.name!r} due={self.due_date}>'


def parse_yes_no(value):
    """Map the onboarding yes/no answer (or a bool) to a bool; None if unknown."""
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    text = str(value).strip().lower()
    if text in ('yes', 'true', '1'):
        return True
    if text in ('no', 'false', '0'):
        return False
    return None
