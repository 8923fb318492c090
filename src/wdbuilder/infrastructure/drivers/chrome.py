from __future__ import annotations

import base64
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService

from wdbuilder.config.settings import Settings
from wdbuilder.crosscutting.flow import Flow, run_in_flow
from wdbuilder.crosscutting.logging_config import get_logger
from wdbuilder.domain.capabilities import Capabilities, Capability
from wdbuilder.domain.models.proxy_models import ProxyConfig
from wdbuilder.domain.ports.session_port import DriverBinaryNotFoundError

from .options_mapping import apply_capabilities

log = get_logger("chrome")

OPTIONS_KEY = "goog:chromeOptions"
_LEGACY_OPTIONS_KEY = "chromeOptions"

# Flags base para sesiones automatizadas (sin efectos sobre el perfil del usuario)
AUTOMATION_FLAGS = (
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-extensions",
    "--disable-background-timer-throttling",
    "--disable-renderer-backgrounding",
    "--disable-backgrounding-occluded-windows",
    "--metrics-recording-only",
    "--no-first-run",
    "--no-default-browser-check",
)

DEFAULT_PREFS: Dict[str, Any] = {
    "profile.default_content_setting_values.notifications": 2,
    "credentials_enable_service": False,
    "profile.password_manager_enabled": False,
}


class Options:
    """
    Opciones específicas de Chrome para drivers creados por el Builder.

    Se proyectan sobre un set de capabilities con `to_capabilities()`,
    que copia el set base y agrega la entrada `goog:chromeOptions`.
    Todos los setters devuelven la misma instancia.
    """

    def __init__(self) -> None:
        self._args: List[str] = []
        self._extensions: List[Union[str, Path]] = []
        self._encoded_extensions: List[str] = []
        self._binary: Optional[str] = None
        self._prefs: Dict[str, Any] = {}
        self._detach: Optional[bool] = None
        self._proxy: Optional[Any] = None
        self._logging_prefs: Optional[Dict[str, str]] = None

    @classmethod
    def for_automation(
        cls,
        *,
        headless: bool = True,
        disable_images: bool = False,
        window_size: str = "1200x800",
        user_agent: Optional[str] = None,
        extra_flags: Optional[list[str]] = None,
    ) -> "Options":
        """Preset con flags y preferencias habituales para correr en CI/Docker."""
        opts = cls().add_arguments(*AUTOMATION_FLAGS)
        opts.window_size(window_size)
        if headless:
            opts.headless()
        if disable_images:
            opts.add_arguments("--blink-settings=imagesEnabled=false")
        if user_agent:
            opts.user_agent(user_agent)
        opts.add_arguments(*(extra_flags or []))
        opts.set_user_preferences(dict(DEFAULT_PREFS))
        return opts

    # ------------------------------------------------------------------ setters

    def add_arguments(self, *args: str) -> "Options":
        for a in args:
            if a and a not in self._args:
                self._args.append(a)
        return self

    def headless(self) -> "Options":
        return self.add_arguments("--headless=new")

    def window_size(self, size: str) -> "Options":
        # Acepta "1200x800" o "1200,800"
        return self.add_arguments(f"--window-size={size.replace('x', ',')}")

    def user_agent(self, ua: str) -> "Options":
        return self.add_arguments(f"--user-agent={ua}")

    def add_extensions(self, *paths: Union[str, Path]) -> "Options":
        self._extensions.extend(paths)
        return self

    def add_encoded_extensions(self, *payloads: str) -> "Options":
        self._encoded_extensions.extend(payloads)
        return self

    def set_chrome_binary_path(self, path: Union[str, Path]) -> "Options":
        self._binary = str(path)
        return self

    def set_user_preferences(self, prefs: Dict[str, Any]) -> "Options":
        self._prefs.update(prefs)
        return self

    def detach_driver(self, detach: bool = True) -> "Options":
        self._detach = bool(detach)
        return self

    def set_proxy(self, proxy: Union[ProxyConfig, Dict[str, Any]]) -> "Options":
        self._proxy = proxy
        return self

    def set_logging_prefs(self, prefs: Dict[str, str]) -> "Options":
        self._logging_prefs = dict(prefs)
        return self

    # --------------------------------------------------------------- proyección

    def to_dict(self) -> Dict[str, Any]:
        """Contenido de la entrada goog:chromeOptions."""
        entry: Dict[str, Any] = {"args": list(self._args)}
        extensions = [_encode_extension(p) for p in self._extensions] + list(self._encoded_extensions)
        if extensions:
            entry["extensions"] = extensions
        if self._binary:
            entry["binary"] = self._binary
        if self._prefs:
            entry["prefs"] = dict(self._prefs)
        if self._detach is not None:
            entry["detach"] = self._detach
        return entry

    def to_capabilities(self, capabilities: Optional[Capabilities] = None) -> Capabilities:
        """
        Proyecta estas opciones sobre una copia de `capabilities`
        (o sobre Capabilities.chrome() si no se pasa ninguna).

        proxy / loggingPrefs sólo se pisan si se configuraron en estas opciones.
        """
        caps = capabilities.copy() if capabilities is not None else Capabilities.chrome()
        caps.set(Capability.BROWSER_NAME, "chrome")
        caps.set(_LEGACY_OPTIONS_KEY, None)
        caps.set(OPTIONS_KEY, self.to_dict())
        if self._proxy is not None:
            caps.set(Capability.PROXY, self._proxy)
        if self._logging_prefs is not None:
            caps.set(Capability.LOGGING_PREFS, self._logging_prefs)
        return caps


def _encode_extension(path: Union[str, Path]) -> str:
    return base64.b64encode(Path(path).read_bytes()).decode("ascii")


# ------------------------------------------------------------------ selenium

def build_selenium_options(capabilities: Capabilities) -> ChromeOptions:
    """Traduce un set de capabilities a ChromeOptions de Selenium."""
    opts = ChromeOptions()
    entry = capabilities.get(OPTIONS_KEY) or capabilities.get(_LEGACY_OPTIONS_KEY) or {}

    for a in entry.get("args", []):
        opts.add_argument(a)
    for ext in entry.get("extensions", []):
        opts.add_encoded_extension(ext)
    if entry.get("binary"):
        opts.binary_location = entry["binary"]
    if entry.get("prefs"):
        opts.add_experimental_option("prefs", entry["prefs"])
    if entry.get("detach") is not None:
        opts.add_experimental_option("detach", bool(entry["detach"]))
    known = {"args", "extensions", "binary", "prefs", "detach"}
    for name, value in entry.items():
        if name not in known:
            opts.add_experimental_option(name, value)

    return apply_capabilities(
        opts, capabilities, skip=frozenset({OPTIONS_KEY, _LEGACY_OPTIONS_KEY})
    )


def _service(settings: Settings) -> ChromeService:
    path = settings.chromedriver_path
    if path is None:
        return ChromeService()
    if not Path(path).exists():
        raise DriverBinaryNotFoundError(
            f"chromedriver no encontrado en {path}",
            browser="chrome",
            code="CHROMEDRIVER_NOT_FOUND",
        )
    return ChromeService(executable_path=str(path))


def _start(capabilities: Capabilities, executor: Optional[Any], settings: Settings):
    options = build_selenium_options(capabilities)
    if executor is not None:
        log.info("chrome_remote_session_starting")
        return webdriver.Remote(command_executor=executor, options=options)
    service = _service(settings)
    log.info("chrome_driver_starting", service_path=str(settings.chromedriver_path or "auto"))
    return webdriver.Chrome(options=options, service=service)


def create_driver(
    capabilities: Capabilities,
    executor: Optional[Any] = None,
    flow: Optional[Flow] = None,
    *,
    settings: Optional[Settings] = None,
):
    """
    Crea un ChromeDriver in-process (o contra `executor` si se provee).

    Con flow devuelve el Future de la creación; sin flow, el WebDriver.
    Los errores de Selenium se propagan sin traducir.
    """
    settings = settings or Settings()
    return run_in_flow(flow, _start, capabilities, executor, settings)
