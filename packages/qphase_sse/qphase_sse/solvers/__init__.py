"""qphase_sse: Solvers Subpackage
-----------------------------
Fixed-step solvers wired to the central registry under the ``"solver"``
namespace. Currently provides Euler–Maruyama (``"euler"``, aliases
``"em"`` and ``"euler_maruyama"``).
"""

from .base import ProgressCallback, Solver
from .euler import EulerSolver

__all__ = ["Solver", "EulerSolver", "ProgressCallback"]
