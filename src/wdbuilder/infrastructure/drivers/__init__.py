"""
Drivers nativos (in-process) y su registry.
"""

from . import chrome, firefox
from .options_mapping import apply_capabilities, generic_options, to_w3c_dict
from .registry import NativeDriverRegistry, get_default_registry

__all__ = [
    # drivers
    "chrome",
    "firefox",
    # options_mapping
    "apply_capabilities",
    "generic_options",
    "to_w3c_dict",
    # registry
    "NativeDriverRegistry",
    "get_default_registry",
]
