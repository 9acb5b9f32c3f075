"""Run the API with uvicorn: ``python -m zoom_notify``."""

import uvicorn

from zoom_notify.config import settings


def main() -> None:
    development = settings.app_env == "development"
    uvicorn.run(
        "zoom_notify.main:app",
        host="0.0.0.0",
        port=settings.port,
        # reload and multiple workers are mutually exclusive in uvicorn
        workers=None if development else settings.web_concurrency,
        reload=development,
        log_level=settings.log_level.lower(),
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
