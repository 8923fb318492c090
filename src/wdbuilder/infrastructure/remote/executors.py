from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

from selenium.webdriver.remote.remote_connection import RemoteConnection

from wdbuilder.config.settings import Settings
from wdbuilder.crosscutting.logging_config import get_logger

log = get_logger("executors")


def create_executor(url: str, *, settings: Optional[Settings] = None) -> RemoteConnection:
    """
    Crea un executor HTTP (RemoteConnection de Selenium) ligado a `url`.
    No abre conexiones: el primer request lo hace la sesión.
    """
    parsed = urlparse((url or "").strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"URL de servidor inválida: {url!r}")

    keep_alive = (settings or Settings()).remote_keep_alive
    log.debug("remote_executor_created", url=url, keep_alive=keep_alive)
    return RemoteConnection(url.strip(), keep_alive=keep_alive)
