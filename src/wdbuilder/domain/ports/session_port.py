from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from wdbuilder.crosscutting.flow import Flow
from wdbuilder.domain.capabilities import Capabilities

# =========================
# Excepciones de dominio
# =========================

class SessionPortError(Exception):
    """
    Error base de los adaptadores de sesión (drivers nativos / remoto).

    El Builder nunca las traduce: llegan tal cual al caller.

    Atributos:
        retryable (bool): True si un reintento podría resolver el error.
        browser (str|None): Navegador involucrado (si aplica).
        code (str|None): Código categorizado del error.
        cause (BaseException|None): Excepción original (opcional).
    """

    retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        browser: Optional[str] = None,
        code: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.browser = browser
        self.code = code
        self.cause = cause


class DriverBinaryNotFoundError(SessionPortError):
    """El binario del driver nativo configurado no existe."""
    retryable = False


# =========================
# Puertos
# =========================

@runtime_checkable
class BrowserOptions(Protocol):
    """Opciones específicas de navegador que saben proyectarse sobre un set de capabilities."""

    def to_capabilities(self, capabilities: Optional[Capabilities] = None) -> Capabilities:
        ...


class NativeDriverFactory(Protocol):
    """Crea una sesión in-process sin pasar por un servidor remoto."""

    def __call__(
        self,
        capabilities: Capabilities,
        executor: Optional[Any] = None,
        flow: Optional[Flow] = None,
    ) -> Any:
        ...


class ExecutorFactory(Protocol):
    """url -> executor capaz de enviar comandos al servidor."""

    def __call__(self, url: str) -> Any:
        ...


class SessionFactory(Protocol):
    """Negocia una sesión nueva contra el executor dado."""

    def __call__(
        self,
        executor: Any,
        capabilities: Capabilities,
        flow: Optional[Flow] = None,
    ) -> Any:
        ...
