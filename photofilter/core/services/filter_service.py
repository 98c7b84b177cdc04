import asyncio
import logging
import time
import threading
from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Any, Callable, Dict, Optional, Union

from ..config import Settings, get_filter_config, get_log_config, get_settings
from ..state import ApplyFilter, EditorReducer, EditorState, Event
from ...engine.image_processing.configs.processing_config import FilterProcessingConfig
from ...engine.image_processing.core.dispatcher import FilterDispatcher, FilterKind, ModificationKind
from ...engine.image_processing.core.pixel_buffer import PixelBuffer
from ...engine.image_processing.utils.image_utils import ProcessingTimeoutError
from ...engine.utils.logging_config import get_job_logger, log_filter_job, setup_logging

logger = logging.getLogger(__name__)
job_logger = get_job_logger(__name__)

Kind = Union[FilterKind, ModificationKind]


class FilterService:
    """
    Runs engine calls on a background worker pool.

    Color filters can take a while (the Gaussian blur in particular), so they
    go to the pool and hand back a Future; tone and geometric changes are cheap
    and ``submit_event`` runs them inline. There is no cancellation: a filter
    that has started runs to completion.
    """
    
    def __init__(self, settings: Optional[Settings] = None,
                 config: Optional[FilterProcessingConfig] = None,
                 reducer: Optional[EditorReducer] = None):
        self.settings = settings or get_settings()
        self.dispatcher = reducer.dispatcher if reducer else FilterDispatcher(config or FilterProcessingConfig())
        self.reducer = reducer or EditorReducer(self.dispatcher)
        filter_config = get_filter_config(self.settings)
        self.max_workers = filter_config["max_workers"]
        self.timeout = filter_config["timeout"]
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="filter-worker"
        )
        self._stats_lock = threading.Lock()
        self.stats = {
            'total_processed': 0,
            'successful_processed': 0,
            'error_count': 0,
            'total_processing_time': 0.0,
            'average_processing_time': 0.0,
            'last_error': None
        }
        
        logger.info(f"FilterService initialized with {self.max_workers} worker(s), {self.timeout:.1f}s timeout")
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
    
    def shutdown(self, wait: bool = True):
        self._executor.shutdown(wait=wait)
        logger.info("FilterService shut down")
    
    # ─── Buffer level ───────────────────────────────────────────────
    def submit(self, kind: Kind, buffer: Optional[PixelBuffer],
               callback: Optional[Callable[[Future], Any]] = None) -> "Future[PixelBuffer]":
        """Queue ``kind`` on the worker pool; ``callback`` receives the finished Future."""
        future = self._executor.submit(self._timed, self._run_job, kind, buffer)
        if callback is not None:
            future.add_done_callback(callback)
        return future
    
    @log_filter_job(job_logger, "request")
    def apply(self, kind: Kind, buffer: Optional[PixelBuffer]) -> Optional[PixelBuffer]:
        """Run on the pool and wait up to ``filter_timeout`` seconds for the result."""
        future = self.submit(kind, buffer)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError:
            raise ProcessingTimeoutError(
                f"{kind.value} did not finish within {self.timeout:.1f}s"
            ) from None
    
    @log_filter_job(job_logger, "async request")
    async def apply_async(self, kind: Kind, buffer: Optional[PixelBuffer]) -> Optional[PixelBuffer]:
        """Awaitable variant for asyncio callers"""
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(self._executor, self._timed, self._run_job, kind, buffer),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            raise ProcessingTimeoutError(
                f"{kind.value} did not finish within {self.timeout:.1f}s"
            ) from None
    
    @log_filter_job(job_logger, "job")
    def _run_job(self, kind: Kind, buffer: Optional[PixelBuffer]) -> Optional[PixelBuffer]:
        return self.dispatcher.apply(kind, buffer)

    # ─── Editor state level ─────────────────────────────────────────
    def submit_event(self, state: EditorState, event: Event,
                     callback: Optional[Callable[[Future], Any]] = None) -> "Future[EditorState]":
        """
        Reduce ``event`` against ``state``. Filter events run on the pool,
        everything else inline; either way a Future of the next state is returned.
        """
        if isinstance(event, ApplyFilter):
            future = self._executor.submit(self._timed, self.reducer.reduce, state, event)
        else:
            future = Future()
            try:
                future.set_result(self.reducer.reduce(state, event))
            except Exception as e:
                future.set_exception(e)
        
        if callback is not None:
            future.add_done_callback(callback)
        return future
    
    # ─── Statistics ─────────────────────────────────────────────────
    def _timed(self, func: Callable, *args):
        start_time = time.time()
        try:
            result = func(*args)
        except Exception as e:
            self._update_processing_stats(time.time() - start_time, success=False, error=str(e))
            raise
        self._update_processing_stats(time.time() - start_time, success=True)
        return result
    
    def _update_processing_stats(self, processing_time: float, success: bool, error: str = None):
        with self._stats_lock:
            self.stats['total_processed'] += 1
            self.stats['total_processing_time'] += processing_time
            self.stats['average_processing_time'] = (
                self.stats['total_processing_time'] / self.stats['total_processed']
            )
            if success:
                self.stats['successful_processed'] += 1
            else:
                self.stats['error_count'] += 1
                self.stats['last_error'] = error
    
    def get_processing_statistics(self) -> Dict[str, Any]:
        with self._stats_lock:
            stats = dict(self.stats)
        total = stats['total_processed']
        stats['success_rate'] = stats['successful_processed'] / total if total else 0.0
        return stats
    
    def reset_statistics(self):
        with self._stats_lock:
            self.stats.update({
                'total_processed': 0,
                'successful_processed': 0,
                'error_count': 0,
                'total_processing_time': 0.0,
                'average_processing_time': 0.0,
                'last_error': None
            })
        logger.info("Processing statistics reset")


def create_filter_service(settings: Optional[Settings] = None,
                          config: Optional[FilterProcessingConfig] = None) -> FilterService:
    """
    Entry point for host applications: configure logging from ``settings``
    (``LOG_LEVEL``, ``LOG_FILE``, ...) and start a FilterService.
    """
    settings = settings or get_settings()
    setup_logging(**get_log_config(settings))
    logger.info(f"Starting {settings.app_name} {settings.app_version} ({settings.environment})")
    return FilterService(settings=settings, config=config)
