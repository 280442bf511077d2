"""
/**
 * @file summarizer/main.py
 * @description FastAPI 应用入口（MVC：仅装配路由与中间件）。
 */
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import os
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
from summarizer.config import load_settings, reload_settings, CONFIG_PATH, CONFIG_LOCAL_PATH

from summarizer.controllers import health_router, summarize_router

app = FastAPI(title="Text Summarization Relay")
def resolve_log_level(name):
    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(level=resolve_log_level(os.getenv("LOG_LEVEL")))
logger = logging.getLogger(__name__)


class ConfigEventHandler(FileSystemEventHandler):
    """Handler for config file changes"""
    def on_modified(self, event):
        if event.is_directory:
            return

        if event.src_path == CONFIG_PATH or event.src_path == CONFIG_LOCAL_PATH:
            reload_settings()


_observer = None


@app.on_event("startup")
async def startup_event():
    global _observer
    settings = load_settings()
    # Fail fast: no credentials, no server
    settings.require_credentials()

    try:
        event_handler = ConfigEventHandler()
        _observer = Observer()
        config_dir = os.path.dirname(CONFIG_PATH)
        _observer.schedule(event_handler, config_dir, recursive=False)
        _observer.start()
        logger.info(f"Config watcher started on {config_dir}")
    except OSError as e:
        _observer = None
        logger.warning(f"Failed to start config watcher: {e}")

    logger.info(f"Server running on port {settings.port}")
    logger.info(f"Test the endpoint: POST http://localhost:{settings.port}/api/summarize")


@app.on_event("shutdown")
async def shutdown_event():
    global _observer

    if _observer:
        _observer.stop()
        _observer.join()
        _observer = None


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(summarize_router)


def run():
    import uvicorn

    settings = load_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
