# app/logging_config.py
import logging

import structlog


def setup_logging(level: str = "INFO"):
    """Route structlog through stdlib logging at ``level``. Handlers are attached once."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        root_logger.addHandler(logging.StreamHandler())
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # TestClient traffic goes through httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return structlog.get_logger()
