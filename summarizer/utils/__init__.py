"""
/**
 * @file summarizer/utils/__init__.py
 * @description 工具函数导出。
 */
"""

from .job_handle import extract_job_id
from .validators import is_non_empty_text, is_valid_url

__all__ = ["extract_job_id", "is_non_empty_text", "is_valid_url"]
