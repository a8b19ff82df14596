"""Persistent translation cache on top of the TranslationCache table.

All functions raise CacheError when the database fails; callers decide
whether that is fatal (cache endpoints) or a miss (translation pipeline).
"""
import logging
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app import db
from app.errors import CacheError
from app.models import TranslationCache

logger = logging.getLogger(__name__)

CACHE_TTL_DAYS = 30


def _rollback():
    try:
        db.session.rollback()
    except SQLAlchemyError as e:
        logger.debug(f"Rollback failed: {e}")


def _key_filter(text: str, source_language: str, target_language: str):
    return TranslationCache.query.filter_by(
        source_text=text,
        source_language=source_language,
        target_language=target_language,
    )


def lookup(text: str, source_language: str, target_language: str, now=None):
    """Return the live cache entry for the key, or None."""
    now = now or datetime.utcnow()
    try:
        return _key_filter(text, source_language, target_language).filter(
            TranslationCache.expires_at > now
        ).first()
    except SQLAlchemyError as e:
        _rollback()
        raise CacheError(f"Cache lookup failed: {e}") from e


def touch(entry, now=None):
    """Record a cache hit: bump usage_count and updated_at, keep expires_at."""
    try:
        # Increment in SQL so concurrent hits are all counted
        TranslationCache.query.filter_by(id=entry.id).update({
            TranslationCache.usage_count: TranslationCache.usage_count + 1,
            TranslationCache.updated_at: now or datetime.utcnow(),
        }, synchronize_session=False)
        db.session.commit()
        db.session.refresh(entry)
        return entry
    except SQLAlchemyError as e:
        _rollback()
        raise CacheError(f"Cache usage update failed: {e}") from e


def _apply_upsert(text, source_language, target_language, translated_text, ttl_days, now):
    entry = _key_filter(text, source_language, target_language).first()

    if entry is None:
        entry = TranslationCache(
            source_text=text,
            source_language=source_language,
            target_language=target_language,
            translated_text=translated_text,
            usage_count=1,
            created_at=now,
        )
        db.session.add(entry)
    elif entry.is_expired(now):
        # Expired rows start over as a fresh entry
        entry.usage_count = 1
        entry.created_at = now
    entry.translated_text = translated_text
    entry.updated_at = now
    entry.refresh_expiry(ttl_days, now)
    db.session.commit()
    return entry


def upsert(text: str, source_language: str, target_language: str,
           translated_text: str, ttl_days: int = CACHE_TTL_DAYS, now=None):
    """
    Insert or overwrite the cache row for (text, source, target).

    A new row starts with usage_count 1. Overwriting a live row keeps its
    usage_count; overwriting an expired row resets it to 1. Either way the
    expiry moves to now + ttl_days.
    """
    now = now or datetime.utcnow()
    try:
        return _apply_upsert(text, source_language, target_language, translated_text, ttl_days, now)
    except IntegrityError:
        # Another request inserted the same key first, overwrite it instead
        _rollback()
        try:
            return _apply_upsert(text, source_language, target_language, translated_text, ttl_days, now)
        except SQLAlchemyError as e:
            _rollback()
            raise CacheError(f"Cache storage failed: {e}") from e
    except SQLAlchemyError as e:
        _rollback()
        raise CacheError(f"Cache storage failed: {e}") from e


def sweep_expired(now=None) -> int:
    """Delete every row whose expires_at is in the past. Returns the count."""
    now = now or datetime.utcnow()
    try:
        deleted = TranslationCache.query.filter(
            TranslationCache.expires_at < now
        ).delete(synchronize_session=False)
        db.session.commit()
    except SQLAlchemyError as e:
        _rollback()
        raise CacheError(f"Cache cleanup failed: {e}") from e

    if deleted:
        logger.info(f"Removed {deleted} expired translations from cache")
    return deleted


def get_stats(now=None) -> dict:
    """Aggregate cache counts, per target language and overall."""
    now = now or datetime.utcnow()
    try:
        rows = db.session.query(
            TranslationCache.target_language,
            func.count(TranslationCache.id),
            func.coalesce(func.sum(TranslationCache.usage_count), 0),
        ).group_by(
            TranslationCache.target_language
        ).order_by(
            TranslationCache.target_language
        ).all()

        total = TranslationCache.query.count()
        expired = TranslationCache.query.filter(TranslationCache.expires_at < now).count()
    except SQLAlchemyError as e:
        _rollback()
        raise CacheError(f"Failed to fetch stats: {e}") from e

    return {
        'languageStats': [
            {
                'target_language': language,
                'translation_count': count,
                'total_usage': int(usage),
            }
            for language, count, usage in rows
        ],
        'totalTranslations': total,
        'expiredTranslations': expired,
        'activeTranslations': total - expired,
    }
