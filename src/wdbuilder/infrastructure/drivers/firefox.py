from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from selenium import webdriver
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService

from wdbuilder.config.settings import Settings
from wdbuilder.crosscutting.flow import Flow, run_in_flow
from wdbuilder.crosscutting.logging_config import get_logger
from wdbuilder.domain.capabilities import Capabilities
from wdbuilder.domain.ports.session_port import DriverBinaryNotFoundError

from .options_mapping import apply_capabilities

log = get_logger("firefox")

OPTIONS_KEY = "moz:firefoxOptions"
_LEGACY_OPTIONS_KEY = "firefoxOptions"


def build_selenium_options(capabilities: Capabilities) -> FirefoxOptions:
    """Traduce un set de capabilities a FirefoxOptions (args, prefs, binary)."""
    opts = FirefoxOptions()
    entry = capabilities.get(OPTIONS_KEY) or capabilities.get(_LEGACY_OPTIONS_KEY) or {}
    for a in entry.get("args", []):
        opts.add_argument(a)
    for name, value in (entry.get("prefs") or {}).items():
        opts.set_preference(name, value)
    if entry.get("binary"):
        opts.binary_location = entry["binary"]
    return apply_capabilities(
        opts, capabilities, skip=frozenset({OPTIONS_KEY, _LEGACY_OPTIONS_KEY})
    )


def _service(settings: Settings) -> FirefoxService:
    path = settings.geckodriver_path
    if path is None:
        return FirefoxService()
    if not Path(path).exists():
        raise DriverBinaryNotFoundError(
            f"geckodriver no encontrado en {path}",
            browser="firefox",
            code="GECKODRIVER_NOT_FOUND",
        )
    return FirefoxService(executable_path=str(path))


def _start(capabilities: Capabilities, executor: Optional[Any], settings: Settings):
    options = build_selenium_options(capabilities)
    if executor is not None:
        return webdriver.Remote(command_executor=executor, options=options)
    service = _service(settings)
    log.info("firefox_driver_starting", service_path=str(settings.geckodriver_path or "auto"))
    return webdriver.Firefox(options=options, service=service)


def create_driver(
    capabilities: Capabilities,
    executor: Optional[Any] = None,
    flow: Optional[Flow] = None,
    *,
    settings: Optional[Settings] = None,
):
    """GeckoDriver in-process; misma convención que chrome.create_driver."""
    return run_in_flow(flow, _start, capabilities, executor, settings or Settings())
