from datetime import datetime, timezone
from filevault.extensions import db


class TokenBlocklist(db.Model):
    """Model for storing revoked tokens"""
    __tablename__ = 'jwt_token_blocklist'

    id = db.Column(db.Integer, primary_key=True)
    jti = db.Column(db.String(36), unique=True, nullable=False)
    token_type = db.Column(db.String(10), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    revoked_at = db.Column(db.DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    expires = db.Column(db.DateTime(timezone=True), nullable=False)

    @classmethod
    def is_token_revoked(cls, jti):
        """Check if a token is in the blocklist"""
        return cls.query.filter_by(jti=jti).first() is not None
