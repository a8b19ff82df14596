"""Translation cache model for storing translated content."""
from datetime import datetime, timedelta

from app import db


def utcnow():
    return datetime.utcnow()


class TranslationCache(db.Model):
    """Cache translations to avoid re-translating the same text.

    One row per (source_text, source_language, target_language). A row is
    logically absent once ``expires_at`` has passed, even before the sweep
    physically removes it.
    """
    __tablename__ = 'translation_cache'

    id = db.Column(db.Integer, primary_key=True)
    source_text = db.Column(db.Text, nullable=False)
    source_language = db.Column(db.String(10), nullable=False)
    target_language = db.Column(db.String(10), nullable=False)
    translated_text = db.Column(db.Text, nullable=False)
    usage_count = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)

    __table_args__ = (
        db.UniqueConstraint(
            'source_text', 'source_language', 'target_language',
            name='unique_translation_key'
        ),
    )

    def is_expired(self, now=None) -> bool:
        return (now or utcnow()) > self.expires_at

    def refresh_expiry(self, days: int, now=None):
        self.expires_at = (now or utcnow()) + timedelta(days=days)

    def to_dict(self):
        """Convert cache entry to the camelCase wire format."""
        return {
            'id': self.id,
            'translatedText': self.translated_text,
            'sourceLanguage': self.source_language,
            'targetLanguage': self.target_language,
            'originalText': self.source_text,
            'usageCount': self.usage_count,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
            'expiresAt': self.expires_at.isoformat() if self.expires_at else None,
        }

    def __repr__(self):
        return f'<TranslationCache {self.source_language}->{self.target_language} #{self.id}>'
