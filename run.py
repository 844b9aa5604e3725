"""
Development entrypoint.

Serves the API with uvicorn on TRIVIA_SERVER_ADDRESS. Production uses
gunicorn with ``gunicorn.conf.py`` instead.
"""
import uvicorn

from app.core.config import settings


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.bind_host,
        port=settings.bind_port,
        timeout_keep_alive=int(settings.SERVER_IDLE_TIMEOUT),
        timeout_graceful_shutdown=int(settings.GRACEFUL_SHUTDOWN_TIMEOUT),
        log_level=settings.LOG_LEVEL.lower(),
        access_log=False,
    )
