"""Gunicorn configuration for the warehouse directory API (`gunicorn app.main:app`)."""

import os

# FastAPI is ASGI; gunicorn only supervises uvicorn workers.
worker_class = "uvicorn.workers.UvicornWorker"

bind = f"0.0.0.0:{os.getenv('PORT', '8000')}"

workers = int(os.getenv("WEB_CONCURRENCY", "2"))
timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "30"))

# Access lines come from the request middleware as JSON.
accesslog = None
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info")
