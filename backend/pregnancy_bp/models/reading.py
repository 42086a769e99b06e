"""
Blood pressure reading record.

Readings are plain objects serialized as JSON into the readings blob; they are
never updated once created, only deleted.
"""
import uuid

SITTING = 'sitting'
LYING = 'lying'
STANDING = 'standing'
POSITIONS = (SITTING, LYING, STANDING)

SYMPTOMS = (
    'Headache',
    'Dizziness',
    'Blurred vision',
    'Nausea',
    'Swelling in hands/feet',
    'Chest pain',
    'Shortness of breath',
    'Upper abdominal pain',
    'Sudden weight gain',
)


def new_reading_id() -> str:
    return uuid.uuid4().hex


class Reading:
    """
    A single blood pressure / pulse measurement.
    category and pregnancy_week are derived at creation and frozen.
    """

    __slots__ = ('id', 'systolic', 'diastolic', 'pulse', 'date', 'time', 'notes',
                 'symptoms', 'position', 'category', 'pregnancy_week')

    def __init__(self, id, systolic, diastolic, pulse, date, time, category,
                 pregnancy_week, notes='', symptoms=(), position=SITTING):
        self.id = id
        self.systolic = systolic
        self.diastolic = diastolic
        self.pulse = pulse
        self.date = date
        self.time = time
        self.notes = notes or ''
        self.symptoms = tuple(symptoms)
        self.position = position
        self.category = category
        self.pregnancy_week = pregnancy_week

    def to_dict(self):
        return {
            'id': self.id,
            'systolic': self.systolic,
            'diastolic': self.diastolic,
            'pulse': self.pulse,
            'date': self.date,
            'time': self.time,
            'notes': self.notes,
            'symptoms': list(self.symptoms),
            'position': self.position,
            'category': self.category,
            'pregnancyWeek': self.pregnancy_week,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Reading':
        """Rebuild a reading from its stored form. Raises KeyError/ValueError/TypeError."""
        return cls(
            id=str(data['id']),
            systolic=int(data['systolic']),
            diastolic=int(data['diastolic']),
            pulse=int(data['pulse']),
            date=str(data['date']),
            time=str(data['time']),
            notes=data.get('notes') or '',
            symptoms=list(data.get('symptoms') or []),
            position=data.get('position') or SITTING,
            category=str(data['category']),
            pregnancy_week=int(data['pregnancyWeek']),
        )

    def __eq__(self, other):
        if not isinstance(other, Reading):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f'<Reading {self.id}: {self.systolic}/{self.diastolic}>'
