"""
/**
 * @file summarizer/services/language_client_service.py
 * @description Azure Language analyze-text 任务接口封装：提交任务、查询任务状态。
 */
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from summarizer.config import Settings, load_settings
from summarizer.services.errors import ConfigurationError, SubmissionError, TransportError


logger = logging.getLogger(__name__)

JOBS_PATH = "/language/analyze-text/jobs"


def _response_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class LanguageClient:
    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self._initial_settings = settings
        self._session = session

    @property
    def settings(self) -> Settings:
        return self._initial_settings or load_settings()

    @property
    def api_key(self) -> Optional[str]:
        return self.settings.resolve_language_key()

    @property
    def endpoint(self) -> str:
        endpoint = self.settings.resolve_language_endpoint()
        if not endpoint:
            raise ConfigurationError("Missing endpoint. Set AZURE_LANGUAGE_ENDPOINT or config.local.json")
        return endpoint.rstrip("/")

    @property
    def http(self):
        return self._session or requests

    def _get_headers(self) -> Dict[str, str]:
        key = self.api_key
        if not key:
            raise ConfigurationError("Missing API key. Set AZURE_LANGUAGE_KEY or config.local.json")
        return {"Ocp-Apim-Subscription-Key": key, "Content-Type": "application/json"}

    def _params(self) -> Dict[str, str]:
        return {"api-version": self.settings.api_version}

    def jobs_url(self, job_id: Optional[str] = None) -> str:
        url = f"{self.endpoint}{JOBS_PATH}"
        return f"{url}/{job_id}" if job_id else url

    def submit_job(self, payload: Dict[str, Any]) -> requests.Response:
        """
        POST the job. Returns the raw response so the caller can read the
        ``operation-location`` header; non-2xx responses raise SubmissionError.
        """
        try:
            response = self.http.post(
                self.jobs_url(),
                headers=self._get_headers(),
                params=self._params(),
                json=payload,
                timeout=self.settings.request_timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"Job submission request failed: {e}")

        if not 200 <= response.status_code < 300:
            raise SubmissionError(
                f"Job submission rejected with status {response.status_code}",
                _response_body(response),
            )
        return response

    def get_job(self, job_id: str) -> Dict[str, Any]:
        try:
            response = self.http.get(
                self.jobs_url(job_id),
                headers=self._get_headers(),
                params=self._params(),
                timeout=self.settings.request_timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"Job status request failed: {e}")

        if response.status_code != 200:
            raise TransportError(
                f"Job status request returned {response.status_code}",
                _response_body(response),
                status_code=response.status_code,
            )
        data = _response_body(response)
        if not isinstance(data, dict):
            raise TransportError("Malformed job status response", data, status_code=response.status_code)
        return data
