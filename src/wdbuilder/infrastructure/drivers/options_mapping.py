from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from selenium.webdriver.common.options import ArgOptions, BaseOptions

from wdbuilder.domain.capabilities import Browser, Capabilities, Capability
from wdbuilder.domain.models.proxy_models import ProxyConfig

logger = logging.getLogger(__name__)

# Claves legacy (JSON wire) -> nombre W3C
_W3C_ALIASES: Dict[str, str] = {
    Capability.VERSION.value: "browserVersion",
    Capability.ACCEPT_SSL_CERTS.value: "acceptInsecureCerts",
    Capability.UNEXPECTED_ALERT_BEHAVIOR.value: "unhandledPromptBehavior",
    "chromeOptions": "goog:chromeOptions",
    "firefoxOptions": "moz:firefoxOptions",
}

# Sin equivalente W3C: un endpoint estricto rechaza la sesión si llegan.
_LEGACY_ONLY = frozenset(
    {
        Capability.JAVASCRIPT_ENABLED.value,
        Capability.TAKES_SCREENSHOT.value,
        Capability.HANDLES_ALERTS.value,
        Capability.SUPPORTS_CSS_SELECTORS.value,
        Capability.ROTATABLE.value,
        Capability.NATIVE_EVENTS.value,
    }
)

# Consumidas por wdbuilder; nunca viajan al driver.
_LOCAL_ONLY = frozenset({Capability.SERVER_URL.value})


def proxy_to_wire(value: Any) -> Any:
    if isinstance(value, ProxyConfig):
        return value.to_capability()
    return value


def to_w3c_dict(capabilities: Capabilities, *, skip: frozenset = frozenset()) -> Dict[str, Any]:
    """
    Traduce un set de capabilities al dict que entiende Selenium 4 (W3C).

    - renombra claves legacy (version, platform, acceptSslCerts...)
    - descarta las claves sin equivalente y las locales (serverUrl)
    - serializa ProxyConfig
    - loggingPrefs sólo se conserva para Chrome (goog:loggingPrefs)
    """
    browser = capabilities.browser_name
    out: Dict[str, Any] = {}
    for key, value in capabilities.items():
        if key in _LOCAL_ONLY or key in skip:
            continue
        if key in _LEGACY_ONLY:
            logger.debug("legacy capability descartada: %s", key)
            continue
        if key == Capability.LOGGING_PREFS.value:
            if browser == Browser.CHROME.value:
                out["goog:loggingPrefs"] = value
            continue
        if key == Capability.PLATFORM.value:
            platform = str(value).strip().lower()
            if platform and platform != "any":
                out["platformName"] = platform
            continue
        if key == Capability.PROXY.value:
            value = proxy_to_wire(value)
        out[_W3C_ALIASES.get(key, key)] = value
    return out


def apply_capabilities(
    options: BaseOptions,
    capabilities: Capabilities,
    *,
    skip: frozenset = frozenset(),
) -> BaseOptions:
    """Vuelca las capabilities (ya traducidas a W3C) sobre un objeto Options de Selenium."""
    for name, value in to_w3c_dict(capabilities, skip=skip).items():
        options.set_capability(name, value)
    return options


def generic_options(capabilities: Capabilities, options: Optional[BaseOptions] = None) -> BaseOptions:
    """Options genéricas (sin clase por navegador) para sesiones remotas."""
    return apply_capabilities(options or ArgOptions(), capabilities)
