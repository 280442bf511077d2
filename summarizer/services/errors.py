"""
/**
 * @file summarizer/services/errors.py
 * @description 摘要任务错误类型：校验、提交、任务失败、轮询超时、网络传输。
 */
"""

from __future__ import annotations

from typing import Any, Optional


class SummarizerError(Exception):
    """Base class. ``details`` carries the remote response body when there is one."""

    status_code = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_details(self) -> Any:
        return self.details if self.details is not None else self.message


class ConfigurationError(SummarizerError):
    pass


class ValidationError(SummarizerError):
    status_code = 400


class SubmissionError(SummarizerError):
    pass


class JobFailedError(SummarizerError):
    def __init__(self, job_id: str, details: Any = None):
        super().__init__(f"Job {job_id} failed", details)
        self.job_id = job_id


class PollTimeoutError(SummarizerError):
    def __init__(self, job_id: str, attempts: int):
        super().__init__(f"Job polling timeout: job {job_id} not finished after {attempts} attempts")
        self.job_id = job_id
        self.attempts = attempts


class TransportError(SummarizerError):
    def __init__(self, message: str, details: Any = None, status_code: Optional[int] = None):
        super().__init__(message, details)
        self.remote_status = status_code
