"""
/**
 * @file summarizer/controllers/summarize_controller.py
 * @description 文本摘要控制器：提交任务并等待结果。
 */
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from summarizer.models.summarize_request_model import ErrorResponse, SummarizeRequest, SummarizeResponse
from summarizer.services import JobPoller, SummarizerError, ValidationError
from summarizer.utils import is_non_empty_text


router = APIRouter()
logger = logging.getLogger(__name__)


def _build_poller() -> JobPoller:
    return JobPoller()


@router.post(
    "/api/summarize",
    response_model=SummarizeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def summarize(req: SummarizeRequest):
    # Plain def: FastAPI runs it in the threadpool, so the poll wait only blocks this request
    if not is_non_empty_text(req.text):
        return JSONResponse(status_code=400, content={"error": "Text is required"})

    try:
        result = _build_poller().summarize(req.text)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": e.message})
    except SummarizerError as e:
        logger.error(f"Error: {e.to_details()}")
        return JSONResponse(
            status_code=e.status_code,
            content={"error": "Failed to summarize text", "details": e.to_details()},
        )
    except Exception as e:
        logger.exception("Unexpected error while summarizing")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to summarize text", "details": str(e)},
        )

    return {"success": True, "data": result}
