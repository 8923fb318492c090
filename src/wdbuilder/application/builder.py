from __future__ import annotations

from functools import partial
from typing import Any, Mapping, Optional, Union

from wdbuilder.config.settings import Settings
from wdbuilder.crosscutting.flow import Flow, get_active_flow
from wdbuilder.crosscutting.logging_config import get_logger
from wdbuilder.domain.capabilities import Capabilities, Capability
from wdbuilder.domain.models.proxy_models import ProxyConfig
from wdbuilder.domain.ports.session_port import (
    BrowserOptions,
    ExecutorFactory,
    SessionFactory,
)
from wdbuilder.infrastructure.drivers.registry import (
    NativeDriverRegistry,
    bind_settings,
    get_default_registry,
)
from wdbuilder.infrastructure.remote.executors import create_executor
from wdbuilder.infrastructure.remote.session_factory import create_session

log = get_logger("builder")


class Builder:
    """
    Crea sesiones WebDriver a partir de un set de capabilities.

    Estrategia de `build()`:
      1. URL de servidor configurada -> sesión remota contra esa URL (siempre gana).
      2. Sin URL y navegador con driver nativo -> factory nativa, sin executor remoto.
      3. Sin URL ni driver nativo -> sesión remota contra la URL por defecto.

    No es thread-safe: un Builder se usa desde un único caller (encadenando setters).
    """

    def __init__(
        self,
        capabilities: Optional[Mapping[Any, Any]] = None,
        *,
        registry: Optional[NativeDriverRegistry] = None,
        executor_factory: Optional[ExecutorFactory] = None,
        session_factory: Optional[SessionFactory] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or Settings()
        self._capabilities = Capabilities(capabilities)
        self._server_url: Optional[str] = None
        self._flow: Optional[Flow] = None

        self._registry = registry if registry is not None else get_default_registry()
        self._executor_factory = executor_factory or partial(create_executor, settings=self._settings)
        self._session_factory = session_factory or create_session

    # ------------------------------------------------------------ accessors

    def using_server(self, url: Optional[str]) -> "Builder":
        """Fuerza ejecución remota contra `url` (None vuelve a la resolución normal)."""
        self._server_url = url or None
        return self

    def get_server_url(self) -> Optional[str]:
        """
        URL del servidor remoto configurado, por prioridad:
        using_server() > capability serverUrl > SELENIUM_REMOTE_URL.
        """
        return (
            self._server_url
            or self._capabilities.get(Capability.SERVER_URL)
            or self._settings.selenium_remote_url
        )

    def with_capabilities(self, capabilities: Mapping[Any, Any]) -> "Builder":
        """Reemplaza el set completo por una copia de `capabilities`."""
        self._capabilities = Capabilities(capabilities)
        return self

    def get_capabilities(self) -> Capabilities:
        return self._capabilities

    def get_execution_flow(self) -> Optional[Flow]:
        return self._flow

    # -------------------------------------------------------------- setters

    def set_proxy(self, config: Union[ProxyConfig, Mapping[str, Any]]) -> "Builder":
        """
        Configura el proxy de las sesiones creadas por este builder.
        Un with_capabilities() posterior descarta este valor.
        """
        self._capabilities.set(Capability.PROXY, config)
        return self

    def set_browser_options(self, options: BrowserOptions) -> "Builder":
        """
        Proyecta opciones específicas del navegador (p. ej. chrome.Options)
        sobre el set actual y reemplaza el set por el resultado.
        Las claves que la proyección no reproduzca se pierden.
        """
        projected = options.to_capabilities(self._capabilities)
        return self.with_capabilities(projected)

    def set_execution_flow(self, flow: Optional[Flow]) -> "Builder":
        """
        Flow donde se ejecutará la creación de la sesión.
        None -> se usa el flow ambiental activo al momento de build().
        """
        self._flow = flow
        return self

    # ---------------------------------------------------------------- build

    def build(self) -> Any:
        """
        Resuelve la estrategia y devuelve la sesión (o su Future si hay flow).
        Los errores de las factories se propagan sin traducir.
        Las factories reciben una copia: mutar el builder tras build() no afecta
        a una sesión que todavía se está creando en el flow.
        """
        capabilities = self._capabilities.copy()
        browser = capabilities.browser_name
        flow = self._flow if self._flow is not None else get_active_flow()
        url = self.get_server_url()
        log.debug("build_started", browser=browser, server_url=url, flow=flow is not None)

        if not url:
            factory = self._registry.resolve(browser)
            if factory is not None:
                log.info("native_driver_selected", browser=browser, flow=flow is not None)
                return bind_settings(factory, self._settings)(capabilities, None, flow)

            url = self._settings.default_server_url
            log.info("default_server_fallback", browser=browser, server_url=url)
        else:
            log.info("remote_server_selected", browser=browser, server_url=url)

        executor = self._executor_factory(url)
        return self._session_factory(executor, capabilities, flow)
