"""
Validation decorators for pixpro operations.

Provides reusable argument checking shared by the color, resize, noise,
sky and pattern modules. Every check runs before the wrapped function
allocates its output.
"""

from __future__ import annotations

import numbers
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeAlias

# Type alias for callables
F: TypeAlias = Callable[..., Any]

_MISSING = object()


def _lookup(args: tuple, kwargs: dict, param_name: str, param_index: int) -> Any:
    """Fetch an argument by position or keyword, or _MISSING if absent."""
    if len(args) > param_index:
        return args[param_index]
    return kwargs.get(param_name, _MISSING)


def _require_number(param_name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(
            f"{param_name} must be a number, got {type(value).__name__}. "
            f"Provide a numeric value (int or float)."
        )


def validate_range(
    min_val: float,
    max_val: float,
    param_name: str = "value",
    param_index: int = 1,
) -> Callable[[F], F]:
    """
    Decorator for validating numeric parameter ranges.

    Args:
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive)
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature (default: 1 = first arg after self)

    Returns:
        Decorated function with range validation

    Example:
        >>> @validate_range(-20.0, 20.0, 'stops')
        ... def exposure(self, stops: float) -> Self:
        ...     self._exposure_operations.append(stops)
        ...     return self
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            value = _lookup(args, kwargs, param_name, param_index)
            if value is _MISSING:
                # No value provided, let function handle its default
                return func(*args, **kwargs)

            _require_number(param_name, value)

            if not min_val <= value <= max_val:
                suggestion = ""
                if "exposure" in param_name or "stops" in param_name:
                    suggestion = " Use 0.0 for no change, +1.0 to double and -1.0 to halve."
                elif "octaves" in param_name:
                    suggestion = " Six octaves is a good default for 512px images."

                raise ValueError(
                    f"{param_name}={value} is outside valid range [{min_val}, {max_val}].{suggestion}"
                )

            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def validate_positive(param_name: str = "value", param_index: int = 1) -> Callable[[F], F]:
    """
    Decorator for validating positive numeric parameters.

    Args:
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature

    Returns:
        Decorated function with positive validation

    Example:
        >>> @validate_positive('gamma')
        ... def gamma(self, value: float) -> Self:
        ...     self._gamma_operations.append(value)
        ...     return self
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            value = _lookup(args, kwargs, param_name, param_index)
            if value is _MISSING:
                return func(*args, **kwargs)

            _require_number(param_name, value)

            if value <= 0:
                suggestion = ""
                if "gamma" in param_name:
                    suggestion = " Gamma must be positive. Use 2.2 for display encoding, 1.0 for linear."
                elif "scale" in param_name:
                    suggestion = " Scale must be positive. Use 1.0 for the default lattice density."

                raise ValueError(f"{param_name}={value} must be positive (> 0).{suggestion}")

            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def validate_dimensions(
    width_name: str = "width",
    height_name: str = "height",
    width_index: int = 0,
) -> Callable[[F], F]:
    """
    Decorator for validating an image size given as (width, height) arguments.

    The height argument is expected right after the width argument.

    Args:
        width_name: Name of the width parameter
        height_name: Name of the height parameter
        width_index: Position of the width parameter in the signature

    Returns:
        Decorated function that raises before running on a non-positive size

    Example:
        >>> @validate_dimensions()
        ... def make_uv_image(width: int, height: int) -> np.ndarray:
        ...     ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            for name, index in ((width_name, width_index), (height_name, width_index + 1)):
                value = _lookup(args, kwargs, name, index)
                if value is _MISSING:
                    continue
                if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                    raise TypeError(
                        f"{name} must be an integer, got {type(value).__name__}."
                    )
                if value <= 0:
                    raise ValueError(
                        f"{name}={value} must be positive (> 0). Images need at least one pixel."
                    )

            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator
