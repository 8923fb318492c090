"""Registry de drivers nativos: browser -> factory in-process."""
from __future__ import annotations

from functools import partial
from typing import Dict, Iterable, Optional, Tuple, Union

from wdbuilder.config.settings import Settings
from wdbuilder.crosscutting.logging_config import get_logger
from wdbuilder.domain.capabilities import Browser, browser_id
from wdbuilder.domain.ports.session_port import NativeDriverFactory

from . import chrome, firefox

log = get_logger("driver_registry")


class NativeDriverRegistry:
    """
    Mapeo explícito identificador de navegador -> factory de driver nativo.

    Un navegador sin entrada no es un error: el Builder cae al servidor remoto.
    """

    def __init__(
        self,
        entries: Optional[Iterable[Tuple[Union[Browser, str], NativeDriverFactory]]] = None,
    ) -> None:
        self._factories: Dict[str, NativeDriverFactory] = {}
        for browser, factory in entries or ():
            self.register(browser, factory)

    def register(self, browser: Union[Browser, str], factory: NativeDriverFactory) -> None:
        """
        Registra (o reemplaza) la factory para un navegador.

        Args:
            browser: Browser o identificador libre ("chrome", "firefox"...)
            factory: callable (capabilities, executor=None, flow=None) -> sesión
        """
        key = browser_id(browser)
        if not key:
            raise ValueError("browser vacío")
        if not callable(factory):
            raise TypeError(f"factory para {key!r} no es callable")
        self._factories[key] = factory
        log.debug("native_driver_registered", browser=key)

    def unregister(self, browser: Union[Browser, str]) -> None:
        self._factories.pop(browser_id(browser) or "", None)

    def resolve(self, browser: Optional[Union[Browser, str]]) -> Optional[NativeDriverFactory]:
        """Factory registrada para `browser`, o None si no hay soporte nativo."""
        key = browser_id(browser)
        if key is None:
            return None
        return self._factories.get(key)

    def browsers(self) -> list[str]:
        return list(self._factories)

    def __contains__(self, browser: object) -> bool:
        return self.resolve(browser) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._factories)


def _create_default_registry() -> NativeDriverRegistry:
    registry = NativeDriverRegistry()
    registry.register(Browser.CHROME, chrome.create_driver)
    registry.register(Browser.FIREFOX, firefox.create_driver)
    return registry


# Instancia global (singleton), poblada al importar el módulo
_default_registry = _create_default_registry()


def get_default_registry() -> NativeDriverRegistry:
    """Obtiene el registry global usado por los Builder sin registry explícito."""
    return _default_registry

# Factories propias que aceptan `settings=`; las registradas por terceros no se tocan.
_SETTINGS_AWARE = frozenset({chrome.create_driver, firefox.create_driver})


def bind_settings(factory: NativeDriverFactory, settings: Settings) -> NativeDriverFactory:
    """Fija `settings` en las factories nativas de wdbuilder (paths de chromedriver/geckodriver)."""
    if factory in _SETTINGS_AWARE:
        return partial(factory, settings=settings)
    return factory
