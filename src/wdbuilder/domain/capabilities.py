from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Union


class Browser(str, Enum):
    """Identificadores de navegador reconocidos (valor de la capability browserName)."""
    ANDROID = "android"
    CHROME = "chrome"
    FIREFOX = "firefox"
    INTERNET_EXPLORER = "internet explorer"
    IPAD = "iPad"
    IPHONE = "iPhone"
    OPERA = "opera"
    PHANTOM_JS = "phantomjs"
    SAFARI = "safari"
    HTMLUNIT = "htmlunit"


class Capability(str, Enum):
    """Vocabulario de claves de capability."""
    BROWSER_NAME = "browserName"
    VERSION = "version"
    PLATFORM = "platform"
    JAVASCRIPT_ENABLED = "javascriptEnabled"
    TAKES_SCREENSHOT = "takesScreenshot"
    HANDLES_ALERTS = "handlesAlerts"
    SUPPORTS_CSS_SELECTORS = "cssSelectorsEnabled"
    ROTATABLE = "rotatable"
    ACCEPT_SSL_CERTS = "acceptSslCerts"
    NATIVE_EVENTS = "nativeEvents"
    PROXY = "proxy"
    LOGGING_PREFS = "loggingPrefs"
    UNEXPECTED_ALERT_BEHAVIOR = "unexpectedAlertBehaviour"
    SERVER_URL = "serverUrl"


CapabilityKey = Union[Capability, str]


def _key(key: CapabilityKey) -> str:
    # Las Enum(str) no hashean como su valor: normalizar siempre a str plano.
    return key.value if isinstance(key, Enum) else str(key)


def browser_id(value: Any) -> Optional[str]:
    """Normaliza un Browser/str a su identificador textual (None si vacío)."""
    if value is None:
        return None
    text = value.value if isinstance(value, Enum) else str(value)
    return text or None


class Capabilities(MutableMapping[str, Any]):
    """
    Mapa ordenado capability -> valor.

    - `set(key, None)` elimina la clave.
    - Acepta tanto `Capability` como strings libres (p. ej. "goog:chromeOptions").
    - Mutable: el dueño es el Builder que la creó (o la copió).
    """

    def __init__(self, other: Optional[Mapping[Any, Any]] = None) -> None:
        self._caps: Dict[str, Any] = {}
        if other is not None:
            self.merge(other)

    # ---------------------------------------------------------------- presets

    @classmethod
    def for_browser(cls, browser: Union[Browser, str]) -> "Capabilities":
        return cls().set(Capability.BROWSER_NAME, browser_id(browser))

    @classmethod
    def android(cls) -> "Capabilities":
        return cls.for_browser(Browser.ANDROID)

    @classmethod
    def chrome(cls) -> "Capabilities":
        return cls.for_browser(Browser.CHROME)

    @classmethod
    def firefox(cls) -> "Capabilities":
        return cls.for_browser(Browser.FIREFOX)

    @classmethod
    def ie(cls) -> "Capabilities":
        return cls.for_browser(Browser.INTERNET_EXPLORER)

    @classmethod
    def opera(cls) -> "Capabilities":
        return cls.for_browser(Browser.OPERA)

    @classmethod
    def phantomjs(cls) -> "Capabilities":
        return cls.for_browser(Browser.PHANTOM_JS)

    @classmethod
    def safari(cls) -> "Capabilities":
        return cls.for_browser(Browser.SAFARI)

    @classmethod
    def htmlunit(cls) -> "Capabilities":
        return cls.for_browser(Browser.HTMLUNIT)

    @classmethod
    def htmlunit_with_js(cls) -> "Capabilities":
        return cls.htmlunit().set(Capability.JAVASCRIPT_ENABLED, True)

    # ------------------------------------------------------------- API fluida

    def set(self, key: CapabilityKey, value: Any) -> "Capabilities":
        k = _key(key)
        if value is None:
            self._caps.pop(k, None)
        else:
            self._caps[k] = value.value if isinstance(value, Browser) else value
        return self

    def get(self, key: CapabilityKey, default: Any = None) -> Any:
        return self._caps.get(_key(key), default)

    def has(self, key: CapabilityKey) -> bool:
        return _key(key) in self._caps

    def merge(self, other: Mapping[Any, Any]) -> "Capabilities":
        """Copia (shallow) todas las claves de `other` sobre esta instancia."""
        for k, v in other.items():
            self.set(k, v)
        return self

    def copy(self) -> "Capabilities":
        return Capabilities(self)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._caps)

    @property
    def browser_name(self) -> Optional[str]:
        return browser_id(self.get(Capability.BROWSER_NAME))

    # ------------------------------------------------------- MutableMapping

    def __getitem__(self, key: CapabilityKey) -> Any:
        return self._caps[_key(key)]

    def __setitem__(self, key: CapabilityKey, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: CapabilityKey) -> None:
        del self._caps[_key(key)]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, Enum)):
            return False
        return _key(key) in self._caps

    def __iter__(self) -> Iterator[str]:
        return iter(self._caps)

    def __len__(self) -> int:
        return len(self._caps)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Capabilities):
            return self._caps == other._caps
        if isinstance(other, Mapping):
            return self._caps == {_key(k): v for k, v in other.items()}
        return NotImplemented

    def __repr__(self) -> str:
        return f"Capabilities({self._caps!r})"
