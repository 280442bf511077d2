"""
/**
 * @file summarizer/tests/helpers.py
 * @description 测试辅助：构造配置与模拟 HTTP 响应，避免真实网络请求。
 */
"""

import os
from unittest.mock import Mock, patch

from requests.structures import CaseInsensitiveDict

from summarizer.config.settings import Settings


ENDPOINT = "https://example-language.cognitiveservices.azure.com"
LOCATION = f"{ENDPOINT}/language/analyze-text/jobs/abc123?api-version=2022-10-01-preview"

LANGUAGE_ENV = ("AZURE_LANGUAGE_KEY", "LANGUAGE_API_KEY", "AZURE_LANGUAGE_ENDPOINT", "LANGUAGE_ENDPOINT", "PORT", "HOST")


def without_language_env():
    env = {k: v for k, v in os.environ.items() if k not in LANGUAGE_ENV}
    return patch.dict(os.environ, env, clear=True)


def make_settings(**polling):
    raw = {
        "endpoints": {"language": ENDPOINT + "/"},
        "api_keys": {"language": "test-key"},
        "polling": dict({"max_attempts": 30, "interval_seconds": 1.0}, **polling),
        "job": {"language": "en", "sentence_count": 3},
    }
    return Settings(raw=raw)


def submit_response(location=LOCATION, status_code=202):
    headers = CaseInsensitiveDict()
    if location is not None:
        headers["Operation-Location"] = location
    resp = Mock(status_code=status_code, headers=headers, text="")
    resp.json.side_effect = ValueError("no body")
    return resp


def status_response(status, status_code=200, **extra):
    body = dict({"jobId": "abc123", "status": status}, **extra)
    resp = Mock(status_code=status_code, text=str(body))
    resp.json.return_value = body
    return resp
