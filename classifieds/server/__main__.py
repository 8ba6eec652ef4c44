"""Run the marketplace server with uvicorn: ``python -m classifieds.server``."""

import uvicorn

from classifieds.server.core.config import get_settings


def main() -> None:
    """Start uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "classifieds.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
