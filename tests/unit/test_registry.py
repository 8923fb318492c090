"""
Tests para NativeDriverRegistry.
"""
from unittest.mock import Mock

import pytest

from wdbuilder.domain.capabilities import Browser
from wdbuilder.infrastructure.drivers import chrome, firefox
from wdbuilder.infrastructure.drivers.registry import (
    NativeDriverRegistry,
    bind_settings,
    get_default_registry,
)


class TestNativeDriverRegistry:

    def test_resolve_registered(self):
        factory = Mock()
        registry = NativeDriverRegistry([(Browser.CHROME, factory)])

        assert registry.resolve("chrome") is factory
        assert registry.resolve(Browser.CHROME) is factory

    @pytest.mark.parametrize("browser", ["htmlunit", "Chrome", None, ""])
    def test_resolve_unknown_returns_none(self, browser):
        registry = NativeDriverRegistry([(Browser.CHROME, Mock())])
        assert registry.resolve(browser) is None

    def test_register_replaces(self):
        first, second = Mock(), Mock()
        registry = NativeDriverRegistry()

        registry.register("chrome", first)
        registry.register("chrome", second)

        assert registry.resolve("chrome") is second
        assert len(registry) == 1

    def test_unregister(self):
        registry = NativeDriverRegistry([("chrome", Mock())])

        registry.unregister(Browser.CHROME)
        registry.unregister("not-there")

        assert "chrome" not in registry

    def test_register_rejects_empty_browser(self):
        with pytest.raises(ValueError):
            NativeDriverRegistry().register("", Mock())

    def test_register_rejects_non_callable(self):
        with pytest.raises(TypeError):
            NativeDriverRegistry().register("chrome", object())

    def test_browsers(self):
        registry = NativeDriverRegistry([("chrome", Mock()), ("firefox", Mock())])
        assert registry.browsers() == ["chrome", "firefox"]


class TestDefaultRegistry:

    def test_is_singleton(self):
        assert get_default_registry() is get_default_registry()

    def test_native_browsers(self):
        registry = get_default_registry()

        assert registry.resolve(Browser.CHROME) is chrome.create_driver
        assert registry.resolve(Browser.FIREFOX) is firefox.create_driver

    @pytest.mark.parametrize("browser", [Browser.HTMLUNIT, Browser.PHANTOM_JS, Browser.SAFARI])
    def test_remote_only_browsers(self, browser):
        assert get_default_registry().resolve(browser) is None


class TestBindSettings:

    def test_own_factories_get_settings(self, test_settings):
        bound = bind_settings(chrome.create_driver, test_settings)

        assert bound.func is chrome.create_driver
        assert bound.keywords == {"settings": test_settings}

    def test_foreign_factory_untouched(self, test_settings):
        custom = Mock()

        assert bind_settings(custom, test_settings) is custom
