"""
Gunicorn configuration for the fact list API.

Bind address and timeouts come from the TRIVIA_* settings (see
app/core/config.py). Run with:

    gunicorn -c gunicorn.conf.py app.main:app
"""
from app.core.config import settings

bind = settings.SERVER_ADDRESS

# The fact store lives in process memory: more than one worker would give
# each worker its own list. Requests are still served concurrently on
# Uvicorn's thread pool inside the single worker.
workers = 1

worker_class = "uvicorn.workers.UvicornWorker"

keepalive = int(settings.SERVER_IDLE_TIMEOUT)

timeout = int(max(settings.SERVER_READ_TIMEOUT, settings.SERVER_WRITE_TIMEOUT))

# Application logs are structlog JSON on stderr; keep gunicorn's own output there too.
loglevel = settings.LOG_LEVEL.lower()
accesslog = None
errorlog = "-"

# Wait this long for in-flight requests to finish on SIGTERM / SIGINT.
graceful_timeout = int(settings.GRACEFUL_SHUTDOWN_TIMEOUT)
