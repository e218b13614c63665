from datetime import datetime, timezone
from filevault.extensions import db


class Upload(db.Model):
    __tablename__ = 'uploads'

    id = db.Column(db.Integer, primary_key=True)
    filename = db.Column(db.String(255), nullable=False, index=True)  # Original client-supplied name, not unique
    storage_key = db.Column(db.String(512), nullable=False, unique=True)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc), nullable=False)

    __table_args__ = (
        db.CheckConstraint("storage_key <> ''", name='ck_uploads_storage_key_not_empty'),
    )

    @classmethod
    def first_by_filename(cls, filename):
        """Oldest record with exactly this filename (case-sensitive)"""
        return cls.query.filter(cls.filename == filename).order_by(cls.id.asc()).first()

    def to_dict(self, storage):
        return {
            'filename': self.filename,
            'url': storage.url(self.storage_key),
        }

    def __repr__(self):
        return f'<Upload {self.id} {self.filename!r} -> {self.storage_key!r}>'
