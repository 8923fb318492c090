"""
wdbuilder: obtención de sesiones WebDriver a partir de capabilities.

Resuelve entre driver nativo, servidor remoto explícito o servidor por defecto
y devuelve siempre el mismo tipo de sesión.
"""

from .application.builder import Builder
from .config.settings import DEFAULT_SERVER_URL, Settings
from .crosscutting.flow import get_active_flow, use_flow
from .domain.capabilities import Browser, Capabilities, Capability
from .domain.models.proxy_models import ProxyConfig, ProxyType
from .domain.ports.session_port import DriverBinaryNotFoundError, SessionPortError
from .infrastructure.drivers import chrome, firefox
from .infrastructure.drivers.registry import NativeDriverRegistry, get_default_registry

__all__ = [
    "Builder",
    "Settings",
    "DEFAULT_SERVER_URL",
    "get_active_flow",
    "use_flow",
    "Browser",
    "Capabilities",
    "Capability",
    "ProxyConfig",
    "ProxyType",
    "SessionPortError",
    "DriverBinaryNotFoundError",
    "chrome",
    "firefox",
    "NativeDriverRegistry",
    "get_default_registry",
]
