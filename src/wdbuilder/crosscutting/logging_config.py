# -*- coding: utf-8 -*-
"""
Configuración de logging estructurado.

Proporciona:
- Logging estructurado con structlog (JSON en producción, consola en desarrollo)
- Silenciado de loggers ruidosos de Selenium/urllib3
"""
from __future__ import annotations

import os
import sys
import logging
from typing import Any, Dict, Optional
import structlog
from structlog.types import Processor


def _add_process_id(
    logger: logging.Logger, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    event_dict["pid"] = os.getpid()
    return event_dict


def configure_structured_logging(
    level: str = "INFO",
    json_format: Optional[bool] = None,
    include_process_id: bool = True,
) -> None:
    """
    Configura logging estructurado con structlog.

    Args:
        level: Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Si True, usa formato JSON. Si None, detecta automáticamente
                     (JSON si LOG_FORMAT=json o si no hay TTY)
        include_process_id: Incluir ID de proceso en logs
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_format is None:
        json_format = (
            os.getenv("LOG_FORMAT", "").lower() == "json"
            or not sys.stdout.isatty()
        )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if include_process_id:
        processors.append(_add_process_id)

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    # Silenciar loggers ruidosos
    for noisy in (
        "selenium",
        "selenium.webdriver.remote.remote_connection",
        "urllib3",
    ):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def configure_from_settings(settings: Any) -> None:
    """Atajo: configura logging a partir de un Settings (log_level / log_format)."""
    configure_structured_logging(
        level=getattr(settings, "log_level", "INFO"),
        json_format=getattr(settings, "json_logs", None),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Obtiene un logger estructurado.

    Args:
        name: Nombre del logger (típicamente el componente)

    Returns:
        Logger estructurado de structlog
    """
    return structlog.get_logger(name)

