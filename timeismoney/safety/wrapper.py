"""
Safe Function Wrappers

Run a strategy or parser and turn any exception into a default value
or a failed ExtractionResult, so one bad page element cannot abort a scan.
"""

import logging
from typing import Callable, Any, Optional, TypeVar
from dataclasses import dataclass

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class ExtractionResult:
    """Outcome of a guarded call."""

    success: bool
    value: Any = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    def unwrap_or(self, default: Any) -> Any:
        return self.value if self.success else default


def safe_call(
    func: Callable[..., T],
    *args,
    default: T = None,
    log_errors: bool = True,
    error_prefix: str = "",
    **kwargs
) -> T:
    """
    Call func, returning default on any exception.

    Args:
        func: Function to call
        *args: Positional arguments
        default: Value returned when func raises
        log_errors: Log the failure as a warning
        error_prefix: Prefix for the log message
        **kwargs: Keyword arguments

    Returns:
        Function result or default
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        if log_errors:
            prefix = f"{error_prefix}: " if error_prefix else ""
            name = getattr(func, "__name__", repr(func))
            logger.warning(f"{prefix}Error in {name}: {e}")
        return default


def safe_extract(func: Callable[..., T], *args, **kwargs) -> ExtractionResult:
    """
    Call func and report the outcome instead of raising.

    Returns:
        ExtractionResult with the value, or the error message and type
    """
    try:
        return ExtractionResult(success=True, value=func(*args, **kwargs))
    except Exception as e:
        logger.debug(f"{getattr(func, '__name__', func)} failed: {e}")
        return ExtractionResult(
            success=False,
            error=str(e),
            error_type=type(e).__name__,
        )

