"""
/**
 * @file summarizer/utils/job_handle.py
 * @description 从 operation-location 响应头解析任务 ID。
 */
"""

from __future__ import annotations

from typing import Optional


def extract_job_id(location: Optional[str]) -> Optional[str]:
    """
    ``https://host/language/analyze-text/jobs/abc123?api-version=x`` -> ``abc123``.
    Returns None when nothing usable is left.
    """
    if not isinstance(location, str):
        return None
    value = location.strip()
    if not value:
        return None
    job_id = value.split("/")[-1].split("?")[0].strip()
    return job_id or None
