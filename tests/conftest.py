"""
Configuración global de pytest con fixtures compartidas.

Este archivo proporciona:
- Settings de test sin depender del entorno
- Mocks para factories nativas, executor remoto y session factory (sin Selenium real)
- Un Builder armado con esos mocks
"""
from __future__ import annotations

from unittest.mock import Mock

import pytest

from wdbuilder.application.builder import Builder
from wdbuilder.config.settings import DEFAULT_SERVER_URL, Settings
from wdbuilder.domain.capabilities import Browser
from wdbuilder.infrastructure.drivers.registry import NativeDriverRegistry


# =========================================================
# Utilidades para tests
# =========================================================

@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch):
    """
    Limpia variables de entorno que cambian la resolución del Builder.

    Esto previene que un SELENIUM_REMOTE_URL de la máquina fuerce modo remoto.
    """
    for var in (
        "SELENIUM_REMOTE_URL",
        "DEFAULT_SERVER_URL",
        "REMOTE_KEEP_ALIVE",
        "CHROMEDRIVER_PATH",
        "GECKODRIVER_PATH",
        "LOG_FORMAT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    yield


# =========================================================
# Fixture: Configuración de Test
# =========================================================

@pytest.fixture
def test_settings() -> Settings:
    """Settings con valores por defecto, sin servidor remoto configurado."""
    return Settings(
        selenium_remote_url=None,
        default_server_url=DEFAULT_SERVER_URL,
    )


# =========================================================
# Fixture: Mocks de colaboradores (sin Selenium real)
# =========================================================

@pytest.fixture
def native_session() -> Mock:
    return Mock(name="native_session")


@pytest.fixture
def chrome_factory(native_session: Mock) -> Mock:
    """Factory nativa de Chrome mockeada: (capabilities, executor, flow) -> sesión."""
    return Mock(name="chrome_factory", return_value=native_session)


@pytest.fixture
def registry(chrome_factory: Mock) -> NativeDriverRegistry:
    """Registry con soporte nativo sólo para Chrome."""
    return NativeDriverRegistry([(Browser.CHROME, chrome_factory)])


@pytest.fixture
def executor_factory() -> Mock:
    """Executor factory mockeada; cada executor recuerda su URL."""
    def make(url: str) -> Mock:
        executor = Mock(name="executor")
        executor.url = url
        return executor

    return Mock(name="executor_factory", side_effect=make)


@pytest.fixture
def remote_session() -> Mock:
    return Mock(name="remote_session")


@pytest.fixture
def session_factory(remote_session: Mock) -> Mock:
    return Mock(name="session_factory", return_value=remote_session)


@pytest.fixture
def make_builder(registry, executor_factory, session_factory, test_settings):
    """
    Factory de Builder con todos los colaboradores mockeados.

    Uso: builder = make_builder({"browserName": "chrome"})
    """
    def factory(capabilities=None, **overrides) -> Builder:
        kwargs = dict(
            registry=registry,
            executor_factory=executor_factory,
            session_factory=session_factory,
            settings=test_settings,
        )
        kwargs.update(overrides)
        return Builder(capabilities, **kwargs)

    return factory
