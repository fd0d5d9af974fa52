"""Gunicorn config for container deployment."""
import os

# Bind to the platform's PORT or default 8000
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uvicorn async workers. With the memory backend each worker holds its own
# store, so run one worker unless CASHPULSE_STORAGE_BACKEND=json.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))

# Timeout must cover an LLM report call plus PDF rendering
timeout = int(float(os.environ.get("CASHPULSE_LLM_TIMEOUT", "60"))) + 30

graceful_timeout = 30

# Keep-alive must exceed the proxy keep-alive (commonly 60s)
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"
