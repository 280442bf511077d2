"""
/**
 * @file summarizer/models/__init__.py
 * @description 数据模型导出。
 */
"""

from .summarize_request_model import ErrorResponse, SummarizeRequest, SummarizeResponse

__all__ = ["ErrorResponse", "SummarizeRequest", "SummarizeResponse"]
