"""
Run the Users API with uvicorn.

    python -m users_api

Host, port, and log level come from settings (BACKEND_HOST, BACKEND_PORT,
LOG_LEVEL environment variables or .env).
"""

import uvicorn

from users_api.config import settings


def main() -> None:
    # One worker: the store lives in process memory and is not shared
    uvicorn.run(
        "users_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
        workers=1,
    )


if __name__ == "__main__":
    main()
