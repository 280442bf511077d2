"""
/**
 * @file summarizer/controllers/__init__.py
 * @description 控制器（路由）导出。
 */
"""

from .health_controller import router as health_router
from .summarize_controller import router as summarize_router

__all__ = [
    "health_router",
    "summarize_router",
]
