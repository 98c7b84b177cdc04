import logging
import threading
import time
import traceback
from enum import Enum
from typing import Any, Dict, List, Optional

from ..image_processing.utils.image_utils import (
    DimensionMismatchError,
    EmptyInputError,
    InvalidParameterError,
    ProcessingTimeoutError,
)

logger = logging.getLogger(__name__)

class ErrorType(Enum):
    EMPTY_INPUT = "empty_input"
    INVALID_PARAMETER = "invalid_parameter"
    DIMENSION_MISMATCH = "dimension_mismatch"
    TIMEOUT = "timeout"
    UNEXPECTED = "unexpected"

_NOTICES = {
    ErrorType.EMPTY_INPUT: "There is no image to process yet",
    ErrorType.INVALID_PARAMETER: "That setting is out of range; the image was left unchanged",
    ErrorType.DIMENSION_MISMATCH: "The image data is inconsistent and could not be processed",
    ErrorType.TIMEOUT: "The filter is taking too long; the image was left unchanged",
    ErrorType.UNEXPECTED: "The image could not be processed",
}

def classify_error(error: Exception) -> ErrorType:
    """Map an exception onto the engine's error taxonomy"""
    if isinstance(error, EmptyInputError):
        return ErrorType.EMPTY_INPUT
    if isinstance(error, InvalidParameterError):
        return ErrorType.INVALID_PARAMETER
    if isinstance(error, DimensionMismatchError):
        return ErrorType.DIMENSION_MISMATCH
    if isinstance(error, ProcessingTimeoutError):
        return ErrorType.TIMEOUT
    return ErrorType.UNEXPECTED

class EngineErrorHandler:
    """
    Records engine failures and turns them into transient user notices.

    Engine operations are deterministic, so no failure is ever worth retrying:
    the same input produces the same error. Reducers on the worker pool share
    one handler, so counts and history are only touched under ``_lock``.
    """

    def __init__(self, max_history_size: int = 100):
        self.error_counts: Dict[ErrorType, int] = {}
        self.error_history: List[Dict[str, Any]] = []
        self.max_history_size = max_history_size
        self._lock = threading.Lock()
    
    def handle_error(self, error: Exception, error_type: Optional[ErrorType] = None,
                    context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Log and record an engine failure, returning the notice for the caller"""
        if error_type is None:
            error_type = classify_error(error)
        
        error_info = {
            "error_type": error_type.value,
            "error_message": str(error),
            "traceback": "".join(traceback.format_exception(type(error), error, error.__traceback__)),
            "context": context or {},
            "timestamp": time.time()
        }
        
        if error_type in (ErrorType.DIMENSION_MISMATCH, ErrorType.UNEXPECTED):
            logger.error(f"{error_type.value}: {str(error)}")
        else:
            logger.warning(f"{error_type.value}: {str(error)}")
        
        with self._lock:
            self.error_counts[error_type] = self.error_counts.get(error_type, 0) + 1
            self._add_to_history(error_info)
        
        return {
            "success": False,
            "error_info": error_info,
            "notice": _NOTICES[error_type],
            "retry_recommended": False,
        }
    
    def _add_to_history(self, error_info: Dict[str, Any]):
        """Add error to history with size limit; caller holds ``_lock``"""
        self.error_history.append(error_info)
        if len(self.error_history) > self.max_history_size:
            del self.error_history[:-self.max_history_size]
    
    def get_error_statistics(self) -> Dict[str, Any]:
        """Error counts and the most frequent failure kind"""
        with self._lock:
            counts = dict(self.error_counts)
            history = list(self.error_history)
        
        total_errors = sum(counts.values())
        recent_errors = [
            e for e in history
            if time.time() - e.get("timestamp", 0) < 3600  # Last hour
        ]
        
        return {
            "total_errors": total_errors,
            "error_counts_by_type": {k.value: v for k, v in counts.items()},
            "recent_errors_count": len(recent_errors),
            "most_common_error": max(counts.items(), key=lambda x: x[1])[0].value if counts else None,
        }
    
    def clear_error_history(self):
        """Clear error history and reset counters"""
        with self._lock:
            self.error_history.clear()
            self.error_counts.clear()
        logger.info("Error history and counters cleared")

# Global error handler instance
error_handler = EngineErrorHandler()
