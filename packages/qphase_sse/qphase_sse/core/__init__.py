"""qphase_sse: Core Subpackage
--------------------------
Protocols (interfaces), registry, and the error/logging taxonomy shared by
every other module.
"""

from .errors import (
    QPSConfigError,
    QPSConstructionError,
    QPSError,
    QPSIOError,
    QPSModelError,
    QPSRegistryError,
    QPSShapeError,
    configure_logging,
    get_logger,
)
from .protocols import Noise, RandomSource, System, Tensor
from .registry import registry

__all__ = [
    "QPSError",
    "QPSIOError",
    "QPSRegistryError",
    "QPSConfigError",
    "QPSModelError",
    "QPSConstructionError",
    "QPSShapeError",
    "configure_logging",
    "get_logger",
    "Noise",
    "RandomSource",
    "System",
    "Tensor",
    "registry",
]
