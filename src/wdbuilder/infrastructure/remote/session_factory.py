from __future__ import annotations

from typing import Any, Optional

from selenium import webdriver

from wdbuilder.crosscutting.flow import Flow, run_in_flow
from wdbuilder.crosscutting.logging_config import get_logger
from wdbuilder.domain.capabilities import Capabilities
from wdbuilder.infrastructure.drivers.options_mapping import generic_options

log = get_logger("session_factory")


def _open(executor: Any, capabilities: Capabilities):
    options = generic_options(capabilities)
    log.info("remote_session_requested", browser=capabilities.browser_name)
    return webdriver.Remote(command_executor=executor, options=options)


def create_session(
    executor: Any,
    capabilities: Capabilities,
    flow: Optional[Flow] = None,
):
    """
    Negocia una sesión nueva contra `executor`.

    Returns:
        WebDriver remoto, o Future[WebDriver] si hay flow.

    Raises:
        SessionNotCreatedException / WebDriverException: sin traducir.
    """
    return run_in_flow(flow, _open, executor, capabilities)
