"""Background sweeps of the translation caches.

Two daemon threads, independent of request handling:
- short-lived cache purge (hourly)
- persistent cache sweep of expired rows (daily)
"""
import logging
import threading

from app.errors import CacheError

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Run ``func`` every ``interval`` seconds on a daemon thread until stopped."""

    def __init__(self, name: str, interval: float, func):
        self.name = name
        self.interval = interval
        self.func = func
        self._stop = threading.Event()
        self._thread = None

    def start(self):
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()

    def stop(self, timeout: float = None):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self):
        while not self._stop.wait(self.interval):
            self.run_once()

    def run_once(self):
        try:
            self.func()
        except Exception:
            # Keep the timer alive, the next run may succeed
            logger.exception(f"Periodic task {self.name} failed")


class CacheSweeper:
    def __init__(self, app, short_interval: float, persistent_interval: float):
        self.app = app
        self.tasks = [
            PeriodicTask('short-cache-purge', short_interval, self.purge_short_cache),
            PeriodicTask('translation-cache-sweep', persistent_interval, self.sweep_persistent_cache),
        ]

    def purge_short_cache(self) -> int:
        from app.services.short_cache import get_short_cache
        cache = get_short_cache(
            ttl=self.app.config.get('SHORT_CACHE_TTL'),
            redis_url=self.app.config.get('REDIS_URL'),
        )
        removed = cache.purge_expired()
        if removed:
            logger.info(f"Purged {removed} stale entries from short-lived translation cache")
        return removed

    def sweep_persistent_cache(self) -> int:
        from app.services import translation_cache
        with self.app.app_context():
            try:
                return translation_cache.sweep_expired()
            except CacheError as e:
                logger.warning(f"Scheduled cache sweep failed: {e}")
                return 0

    def start(self):
        for task in self.tasks:
            task.start()
        logger.info("Translation cache sweeper started")

    def stop(self):
        for task in self.tasks:
            task.stop()


def start_cache_sweeper(app) -> CacheSweeper:
    """Start the sweeper for ``app`` and keep a handle in app.extensions."""
    sweeper = CacheSweeper(
        app,
        short_interval=app.config.get('SHORT_CACHE_SWEEP_INTERVAL', 60 * 60),
        persistent_interval=app.config.get('PERSISTENT_CACHE_SWEEP_INTERVAL', 24 * 60 * 60),
    )
    sweeper.start()
    app.extensions['translation_cache_sweeper'] = sweeper
    return sweeper
