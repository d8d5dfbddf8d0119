"""
Acceleration Dispatcher

Routes each capability call to the native accelerator when one is loaded,
and to the interpreted implementation when it is absent, lacks the
capability, raises, or its circuit breaker is open. Native failures are
logged and counted, never raised; only a fallback error reaches the caller.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import pybreaker

from pagecraft.core.config import Settings
from pagecraft.core.errors import CapabilityUnavailableError
from pagecraft.core.logging_config import get_logger
from pagecraft.monitoring.metrics import MetricsCollector

from .fallback import InterpretedAccelerator
from .native import NativeAccelerator, load_native
from .ports import CAPABILITIES, Accelerator

logger = get_logger(__name__)


class BreakerListener(pybreaker.CircuitBreakerListener):
    """Log circuit breaker state changes."""

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "breaker_state_change",
            breaker=cb.name,
            from_state=str(old_state),
            to_state=str(new_state),
        )


class AccelerationDispatcher:
    """Native-first capability calls with an interpreted fallback."""

    def __init__(
        self,
        fallback: Accelerator | None = None,
        native: NativeAccelerator | None = None,
        metrics: MetricsCollector | None = None,
        fail_max: int = 5,
        reset_timeout: int = 30,
    ) -> None:
        """
        Args:
            fallback: Reference implementation (interpreted by default)
            native: Loaded native adapter, or None to always use the fallback
            metrics: Collector for path/fallback counters
            fail_max: Native failures before the breaker opens
            reset_timeout: Seconds before an open breaker lets a call through
        """
        self.fallback = fallback if fallback is not None else InterpretedAccelerator()
        self.native = native
        self.metrics = metrics if metrics is not None else MetricsCollector()
        self._breaker = pybreaker.CircuitBreaker(
            fail_max=fail_max,
            reset_timeout=reset_timeout,
            name="native-accelerator",
            listeners=[BreakerListener()],
        )

    @classmethod
    def from_settings(cls, settings: Settings, metrics: MetricsCollector | None = None) -> AccelerationDispatcher:
        native = None
        if settings.enable_native:
            module = load_native(settings.native_module)
            if module is not None:
                native = NativeAccelerator(module)
        return cls(
            native=native,
            metrics=metrics,
            fail_max=settings.breaker_fail_max,
            reset_timeout=settings.breaker_reset_timeout,
        )

    @property
    def native_available(self) -> bool:
        return self.native is not None

    async def call(self, capability: str, *args: Any) -> Any:
        """
        Run a capability.

        Raises:
            ValueError: unknown capability name
            Exception: whatever the fallback raises
        """
        if capability not in CAPABILITIES:
            raise ValueError(f"Unknown capability: {capability}")

        if self.native is not None:
            start = time.perf_counter()
            try:
                func = self.native.resolve(capability)
                result = await asyncio.to_thread(self._breaker.call, func, *args)
            except Exception as e:
                reason = self._failure_reason(e)
                logger.warning("native_call_failed", capability=capability, reason=reason, error=str(e))
                self.metrics.record_fallback(capability, reason)
            else:
                self.metrics.record_accel_call(capability, "native", time.perf_counter() - start)
                return result

        start = time.perf_counter()
        try:
            result = getattr(self.fallback, capability)(*args)
        except Exception as e:
            logger.error("fallback_call_failed", capability=capability, error=str(e))
            self.metrics.record_error(type(e).__name__, "accel")
            raise
        self.metrics.record_accel_call(capability, "fallback", time.perf_counter() - start)
        return result

    @staticmethod
    def _failure_reason(error: Exception) -> str:
        if isinstance(error, CapabilityUnavailableError):
            return "unavailable"
        if isinstance(error, pybreaker.CircuitBreakerError):
            return "breaker_open"
        return "error"
