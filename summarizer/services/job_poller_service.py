"""
/**
 * @file summarizer/services/job_poller_service.py
 * @description 摘要任务：提交 -> 解析任务 ID -> 轮询状态 -> 返回结果。
 */
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

from summarizer.config import Settings, load_settings
from summarizer.services.errors import (
    JobFailedError,
    PollTimeoutError,
    SubmissionError,
    TransportError,
    ValidationError,
)
from summarizer.services.language_client_service import LanguageClient
from summarizer.services.poll_policy_service import PollPolicy
from summarizer.utils import extract_job_id, is_non_empty_text


logger = logging.getLogger(__name__)

STATUS_SUCCEEDED = "succeeded"
FAILED_STATUSES = ("failed", "cancelled")


def build_submission(text: str, settings: Settings) -> Dict[str, Any]:
    return {
        "displayName": settings.display_name,
        "analysisInput": {
            "documents": [
                {"id": "1", "language": settings.language, "text": text},
            ]
        },
        "tasks": [
            {
                "kind": "ExtractiveSummarization",
                "parameters": {"sentenceCount": settings.sentence_count},
            }
        ],
    }


class JobPoller:
    """
    Drives one remote analyze-text job from submission to a terminal state.

    One instance per request; it holds no per-job state, so concurrent
    requests never share anything but the (read-only) settings.
    """

    def __init__(
        self,
        client: Optional[LanguageClient] = None,
        policy: Optional[PollPolicy] = None,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings or load_settings()
        self.client = client or LanguageClient(settings=self.settings)
        self.policy = policy or PollPolicy.from_settings(self.settings)
        self._sleep = sleep

    def submit(self, text: str) -> str:
        if not is_non_empty_text(text):
            raise ValidationError("Text is required")

        response = self.client.submit_job(build_submission(text, self.settings))
        location = response.headers.get("operation-location")
        if not location:
            raise SubmissionError("Job submission response has no operation-location header")

        job_id = extract_job_id(location)
        if not job_id:
            raise SubmissionError(f"Could not parse job id from operation-location: {location}")

        logger.info(f"Job submitted: {job_id}")
        return job_id

    def _fetch_status(self, job_id: str) -> Dict[str, Any]:
        retries = self.policy.transport_retries
        for retry in range(retries + 1):
            try:
                return self.client.get_job(job_id)
            except TransportError as e:
                if retry >= retries:
                    raise
                logger.warning(f"Job {job_id} status request failed ({e}), retry {retry + 1}/{retries}")
                self._sleep(self.policy.delay(retry))

    def poll(self, job_id: str, max_attempts: Optional[int] = None) -> Dict[str, Any]:
        attempts = max_attempts if max_attempts is not None else self.policy.max_attempts
        if attempts < 1:
            raise ValueError("max_attempts must be >= 1")

        for attempt in range(attempts):
            snapshot = self._fetch_status(job_id)
            status = snapshot.get("status")

            if status == STATUS_SUCCEEDED:
                logger.info(f"Job {job_id} succeeded after {attempt + 1} attempt(s)")
                return snapshot
            if status in FAILED_STATUSES:
                logger.error(f"Job {job_id} reported status {status}")
                raise JobFailedError(job_id, snapshot.get("errors") or snapshot)

            logger.debug(f"Job {job_id} status {status} (attempt {attempt + 1}/{attempts})")
            if attempt + 1 < attempts:
                self._sleep(self.policy.delay(attempt))

        logger.error(f"Job {job_id} polling timed out after {attempts} attempts")
        raise PollTimeoutError(job_id, attempts)

    def summarize(self, text: str) -> Dict[str, Any]:
        job_id = self.submit(text)
        return self.poll(job_id)
