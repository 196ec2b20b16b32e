"""structlog over stdlib logging, rendered to stderr."""

from __future__ import annotations

import logging
import logging.config

import structlog


def _pre_chain(fmt: str) -> list[structlog.types.Processor]:
    chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if fmt == "json":
        chain.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    chain.append(structlog.processors.format_exc_info)
    return chain


def setup_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Route loc_analyzer loggers to stderr at ``level``.

    stdout carries only the report, so tooling can pipe it.
    """
    pre_chain = _pre_chain(fmt)
    if fmt == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "loc": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "loc",
                },
            },
            "root": {"handlers": ["stderr"], "level": "WARNING"},
            "loggers": {"loc_analyzer": {"level": level.upper()}},
        }
    )
