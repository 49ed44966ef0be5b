"""Run the API with uvicorn: ``python -m pm_web_svc``."""

import uvicorn

from . import config
from .api.app import configure_logging


def main() -> None:
    configure_logging()
    uvicorn.run(
        "pm_web_svc.api.app:app",
        host=config.SERVICE_HOST,
        port=config.SERVICE_PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
