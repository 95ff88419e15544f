"""Run the sprint namer API with uvicorn.

Usage:
    python -m sprintnamer
"""

import uvicorn

from sprintnamer.config import Settings


def main() -> None:
    """Start the HTTP server on the configured host and port."""
    settings = Settings()
    uvicorn.run(
        "sprintnamer.api:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
