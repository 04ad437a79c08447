"""Run the API with uvicorn: ``python -m vidhub``."""

from __future__ import annotations

import uvicorn

from vidhub.core.config import load_settings
from vidhub.main import create_app


def main() -> None:
    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.vidhub_app_host, port=settings.vidhub_app_port)


if __name__ == "__main__":
    main()
