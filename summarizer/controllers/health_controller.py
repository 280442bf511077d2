"""
/**
 * @file summarizer/controllers/health_controller.py
 * @description 健康检查控制器。
 */
"""

from fastapi import APIRouter


router = APIRouter()


@router.get("/health")
def health():
    from summarizer.config import load_settings

    settings = load_settings()

    credentials_ok = bool(settings.resolve_language_key()) and bool(settings.resolve_language_endpoint())

    return {
        "message": "Server is running",
        "checks": {
            "credentials": credentials_ok,
        },
    }
