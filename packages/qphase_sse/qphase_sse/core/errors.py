"""qphase_sse: Error Taxonomy and Logging
-------------------------------------

Error hierarchy and shared logger for the qphase_sse package.

Error Hierarchy
---------------
- QPSError: Base exception for all qphase_sse errors
- QPSIOError: File and archive errors (100-199)
- QPSRegistryError: Registry lookup and registration errors (400-499)
- QPSConfigError: Configuration errors (500-599)
- QPSModelError: Model and system composition errors (600-699)
- QPSConstructionError: Malformed operator/noise construction input (600-699)
- QPSShapeError: Operator/state dimension mismatch on apply (700-799)

Warning Hierarchy
-----------------
- QPSWarning: Base warning for all qphase_sse warnings

Logging
-------
The shared logger is named "qphase_sse" and can be configured for
console and file output with optional JSON formatting.
Python warnings are captured into logging with adjustable levels.
"""

import logging
import os

__all__ = [
    "QPSError",
    "QPSIOError",
    "QPSRegistryError",
    "QPSConfigError",
    "QPSModelError",
    "QPSConstructionError",
    "QPSShapeError",
    "QPSWarning",
    "get_logger",
    "configure_logging",
]


# =============================================================================
# Exception Hierarchy
# =============================================================================


class QPSError(Exception):
    """Base exception for all qphase_sse errors.

    Examples
    --------
    >>> try:
    ...     raise QPSShapeError("[700] mismatch")
    ... except QPSError as e:
    ...     print(e)
    [700] mismatch

    """

    pass


class QPSIOError(QPSError):
    """File and archive errors (Code 100-199).

    Raised when a saved system, result or config file is missing or cannot
    be read back.
    """

    pass


class QPSRegistryError(QPSError):
    """Registry errors (Code 400-499).

    Raised on duplicate registration or lookup of an unknown key.
    """

    pass


class QPSConfigError(QPSError):
    """Configuration-related errors (Code 500-599).

    Raised when configuration validation or YAML parsing fails.
    """

    pass


class QPSModelError(QPSError):
    """Model-related errors (Code 600-699).

    Raised when a system cannot be composed from its parts.
    """

    pass


class QPSConstructionError(QPSModelError):
    """Malformed construction input (Code 600-699).

    Raised by the noise factories and operator constructors when input
    shapes disagree (e.g. amplitude/bra/ket counts differ). Always raised at
    construction, never deferred to first use.
    """

    pass


class QPSShapeError(QPSError):
    """Dimension mismatch between an operator and a state (Code 700-799).

    Operators never pad or truncate; a mismatched state fails immediately.
    """

    pass


# =============================================================================
# Warning Hierarchy
# =============================================================================


class QPSWarning(Warning):
    """Base warning for all qphase_sse warnings."""

    pass


# =============================================================================
# Logger Configuration
# =============================================================================

_logger: logging.Logger | None = None


def get_logger() -> logging.Logger:
    """Get the shared qphase_sse logger instance.

    Returns
    -------
    logging.Logger
        The singleton logger named "qphase_sse" configured at INFO level by
        default with a console handler. Handlers are created lazily on first use.

    Examples
    --------
    >>> logger = get_logger()
    >>> logger.name
    'qphase_sse'

    """
    global _logger
    if _logger is None:
        _logger = logging.getLogger("qphase_sse")
        _logger.setLevel(logging.INFO)
        if not _logger.handlers:
            h = logging.StreamHandler()
            fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            h.setFormatter(fmt)
            _logger.addHandler(h)
    return _logger


def configure_logging(
    verbose: bool = False,
    log_file: str | None = None,
    as_json: bool = False,
    suppress_warnings: bool = False,
) -> None:
    """Configure the shared logger outputs and warning capture.

    Parameters
    ----------
    verbose : bool, default False
        When True, set logger level to DEBUG; otherwise INFO.
    log_file : str or None, default None
        Optional file path to append logs.
    as_json : bool, default False
        Emit logs in a compact JSON line format when True; otherwise plain text.
    suppress_warnings : bool, default False
        Route Python warnings into logging and raise their level to ERROR when
        True; otherwise capture warnings at WARNING level.

    Raises
    ------
    QPSIOError
        - [101] The log file could not be opened.

    """
    logger = get_logger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    ch = logging.StreamHandler()
    if as_json:
        fmt = logging.Formatter(
            '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","msg":"%(message)s"}'
        )
    else:
        fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_file:
        try:
            fh = logging.FileHandler(os.fspath(log_file), encoding="utf-8")
        except OSError as e:
            raise QPSIOError(f"[101] Cannot open log file {log_file}: {e}") from e
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(
        logging.ERROR if suppress_warnings else logging.WARNING
    )
