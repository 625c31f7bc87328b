"""Start the Package Tracking Service with uvicorn."""

import uvicorn

from backend.app.core.config import settings


def main():
    uvicorn.run(
        "backend.app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
