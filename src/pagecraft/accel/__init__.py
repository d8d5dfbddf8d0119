"""Native acceleration with an interpreted fallback."""

from .ports import CAPABILITIES, Accelerator
from .fallback import InterpretedAccelerator
from .native import NativeAccelerator, load_native
from .dispatcher import AccelerationDispatcher

__all__ = [
    "CAPABILITIES",
    "Accelerator",
    "InterpretedAccelerator",
    "NativeAccelerator",
    "load_native",
    "AccelerationDispatcher",
]
