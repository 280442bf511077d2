"""
/**
 * @file summarizer/models/summarize_request_model.py
 * @description 摘要请求/响应模型（Pydantic）。
 */
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel


class SummarizeRequest(BaseModel):
    # Optional so a missing field reaches the controller and gets the 400 body
    text: Optional[str] = None


class SummarizeResponse(BaseModel):
    success: bool = True
    data: Dict[str, Any]


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None
