"""Optional natively compiled accelerator."""

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Any, Callable

from pagecraft.core.errors import CapabilityUnavailableError
from pagecraft.core.logging_config import get_logger

from .ports import CAPABILITIES

logger = get_logger(__name__)


def load_native(module_name: str) -> ModuleType | None:
    """Import the native module by name; None when it is not installed."""
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        logger.info("native_accelerator_absent", module=module_name)
        return None

    logger.info("native_accelerator_loaded", module=module_name)
    return module


class NativeAccelerator:
    """
    Adapter over a native module exposing capability functions by name.

    The module may implement only a subset; asking for a missing capability
    raises CapabilityUnavailableError.
    """

    def __init__(self, module: Any) -> None:
        self._module = module

    @property
    def name(self) -> str:
        return getattr(self._module, "__name__", type(self._module).__name__)

    def provides(self, capability: str) -> bool:
        return callable(getattr(self._module, capability, None))

    def capabilities(self) -> list[str]:
        return [c for c in CAPABILITIES if self.provides(c)]

    def resolve(self, capability: str) -> Callable[..., Any]:
        func = getattr(self._module, capability, None)
        if not callable(func):
            raise CapabilityUnavailableError(capability)
        return func
