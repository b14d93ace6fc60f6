import logging
import sys

import structlog


def setup_logging(level: str = "INFO", json_logs: bool = True) -> None:
	"""
	Configure structlog on top of the standard logging module.
	Log lines go to stdout, one JSON object per event unless json_logs is off.
	"""
	logging.basicConfig(
		format="%(message)s",
		stream=sys.stdout,
		level=getattr(logging, level.upper(), logging.INFO),
	)

	renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
	structlog.configure(
		processors=[
			structlog.stdlib.add_logger_name,
			structlog.processors.add_log_level,
			structlog.processors.TimeStamper(fmt="iso"),
			structlog.processors.format_exc_info,
			renderer,
		],
		logger_factory=structlog.stdlib.LoggerFactory(),
		wrapper_class=structlog.stdlib.BoundLogger,
		cache_logger_on_first_use=True,
	)
