"""Development server entry point."""
import logging
import sys

import uvicorn

from flavorwheel.config import settings


def main():
    """Run the API locally; auto-reload outside production."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "flavorwheel.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.app_env != "production",
        log_level="info",
    )


if __name__ == "__main__":
    sys.exit(main())
