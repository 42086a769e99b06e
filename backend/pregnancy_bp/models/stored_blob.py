"""
Key-value blob record backing the per-user stores.
"""
from datetime import datetime
from pregnancy_bp import db


class StoredBlob(db.Model):
    """
    One serialized record (the readings list or the profile) for one
    signed-in identity. No schema versioning: the value is opaque text.
    """
    __tablename__ = 'stored_blobs'
    __table_args__ = (
        db.UniqueConstraint('owner_id', 'key', name='uq_stored_blobs_owner_key'),
    )

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.String(255), nullable=False, index=True)
    key = db.Column(db.String(64), nullable=False)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @classmethod
    def find(cls, owner_id: str, key: str):
        return cls.query.filter_by(owner_id=owner_id, key=key).first()

    def __repr__(self):
        return f'<StoredBlob {self.owner_id}:{self.key}>'
