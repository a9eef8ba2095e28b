"""ASGI entry point: ``uvicorn coffeehub.main:app``."""

import uvicorn

from coffeehub.api import create_app
from coffeehub.config import get_config

app = create_app()


if __name__ == "__main__":
    config = get_config()
    uvicorn.run(
        "coffeehub.main:app",
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )
