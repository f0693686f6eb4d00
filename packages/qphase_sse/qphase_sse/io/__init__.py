"""qphase_sse: I/O Subpackage
-------------------------
Lossless ``.npz`` persistence of systems.
"""

from .serialization import FORMAT_TAG, load_system, save_system

__all__ = ["FORMAT_TAG", "save_system", "load_system"]
