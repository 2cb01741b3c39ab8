"""Serve the curricula API: ``python -m curricula``."""

import uvicorn

from .app import ApplicationConfig, configure_app


def main() -> None:
    config = ApplicationConfig.from_env()
    app = configure_app(config)
    uvicorn.run(app, host=config.web.host, port=config.web.port,
                log_level=config.logging.level.lower())


if __name__ == "__main__":
    main()
