"""
Entry point for the TradeGPT gateway.

    tradegpt-api                 # console script
    python -m tradegpt.main
"""

import uvicorn

from tradegpt.config import load_settings
from tradegpt.utils.logging import get_logger, set_log_level


def run() -> None:
    """Resolve settings once, apply the log level and serve the app with uvicorn."""
    settings = load_settings()
    set_log_level(settings.log_level)
    logger = get_logger("tradegpt.main")
    logger.info("TradeGPT API listening on %s", settings.port)

    from tradegpt.web_app.server import create_app  # noqa: PLC0415

    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
