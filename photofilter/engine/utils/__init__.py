from .logging_config import (
    FilterJobLogger,
    describe_buffer,
    get_job_logger,
    get_logger,
    log_filter_job,
    setup_logging,
)

__all__ = [
    'FilterJobLogger',
    'describe_buffer',
    'get_job_logger',
    'get_logger',
    'log_filter_job',
    'setup_logging',
]
