"""Entrypoint: run the command center API server."""

import uvicorn

from command_center.api.app import create_app
from command_center.config.settings import Settings


def main() -> None:
    settings = Settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
