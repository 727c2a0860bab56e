from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from fastapi import FastAPI, Request
import uvicorn

from config import config
from logging_config import configure_from_settings
from .routes import health, submit

app = FastAPI(title="Ideabox")

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Content-Security-Policy": "default-src 'self'",
}


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Добавить CORS и защитные заголовки ко всем ответам."""
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@app.on_event("startup")
async def startup() -> None:
    """Создать каталог для заявок, если его ещё нет."""
    base_dir = Path(config.base_dir)
    base_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Submissions will be saved to %s", base_dir.resolve())


# --------- Подключение маршрутов ----------
app.include_router(submit.router)
app.include_router(health.router)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ideabox submission server")
    parser.add_argument("base_dir", nargs="?", default=None, help="Directory for stored submissions")
    parser.add_argument("--host", default=config.host)
    parser.add_argument("--port", type=int, default=config.port)
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Запустить сервер; значения по умолчанию берутся из настроек."""
    args = parse_args(argv)
    if args.base_dir:
        config.base_dir = args.base_dir
    if args.log_level:
        config.log_level = args.log_level
    configure_from_settings(config)

    logger.info("Starting FastAPI server on %s:%s", args.host, args.port)
    try:
        uvicorn.run(app, host=args.host, port=args.port, timeout_graceful_shutdown=3)
    except Exception:
        logger.exception("Failed to start server")
        sys.exit(1)
    logger.info("Server has stopped")


if __name__ == "__main__":
    main()
