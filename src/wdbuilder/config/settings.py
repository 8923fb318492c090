from __future__ import annotations

from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

# -----------------------------
# Constantes
# -----------------------------
# Servidor Selenium "clásico" usado cuando no hay URL explícita ni driver nativo.
DEFAULT_SERVER_URL = "http://localhost:4444/wd/hub"


def _validate_http_url(v: Optional[str], field: str) -> Optional[str]:
    if not v:
        return None
    v = str(v).strip()
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"{field} inválida (esperado: http(s)://host:puerto/ruta): {v!r}")
    return v


# -----------------------------
# Settings principal
# -----------------------------
class Settings(BaseSettings):
    """
    Config central de wdbuilder.
    Todas las claves se pueden sobreescribir por entorno (case-insensitive) o por .env.
    """

    # --- Servidor remoto ---
    # SELENIUM_REMOTE_URL: si está presente fuerza ejecución remota (equivale a using_server()).
    selenium_remote_url: Optional[str] = Field(default=None)
    default_server_url: str = Field(default=DEFAULT_SERVER_URL)
    remote_keep_alive: bool = Field(default=True)

    # --- Drivers nativos ---
    # Si no se configuran, Selenium Manager resuelve el binario.
    chromedriver_path: Optional[Path] = Field(default=None)
    geckodriver_path: Optional[Path] = Field(default=None)

    # --- Logging ---
    log_level: str = Field(default="INFO")
    log_format: Optional[str] = Field(default=None)

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    @field_validator("selenium_remote_url")
    @classmethod
    def _validate_remote_url(cls, v: Optional[str]) -> Optional[str]:
        return _validate_http_url(v, "SELENIUM_REMOTE_URL")

    @field_validator("default_server_url")
    @classmethod
    def _validate_default_url(cls, v: str) -> str:
        validated = _validate_http_url(v, "DEFAULT_SERVER_URL")
        if not validated:
            raise ValueError("DEFAULT_SERVER_URL no puede estar vacía")
        return validated

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()

    # ---------- API pública ----------
    @property
    def json_logs(self) -> Optional[bool]:
        """True/False si LOG_FORMAT está definido; None para autodetectar por TTY."""
        if not self.log_format:
            return None
        return self.log_format.strip().lower() == "json"
