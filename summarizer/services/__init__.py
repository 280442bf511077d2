"""
/**
 * @file summarizer/services/__init__.py
 * @description 业务服务层导出。
 */
"""

from .errors import (
    ConfigurationError,
    JobFailedError,
    PollTimeoutError,
    SubmissionError,
    SummarizerError,
    TransportError,
    ValidationError,
)
from .language_client_service import LanguageClient
from .poll_policy_service import PollPolicy
from .job_poller_service import JobPoller

__all__ = [
    "ConfigurationError",
    "JobFailedError",
    "JobPoller",
    "LanguageClient",
    "PollPolicy",
    "PollTimeoutError",
    "SubmissionError",
    "SummarizerError",
    "TransportError",
    "ValidationError",
]
