# shared/decorators/error_handling.py
import functools
import logging
import traceback
from typing import Any, Callable
from datetime import datetime, timezone
import asyncio

logger = logging.getLogger(__name__)

def handle_errors(default_return: Any = None, log_errors: bool = True):
    """
    Decorator that turns exceptions into a default return value

    Args:
        default_return: Value returned when the wrapped call fails
                        (callables are invoked to build a fresh value)
        log_errors: Log the failure
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                return _handle_exception(e, func.__name__, args, kwargs, default_return, log_errors)

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                return _handle_exception(e, func.__name__, args, kwargs, default_return, log_errors)

        # Return appropriate wrapper based on function type
        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        else:
            return sync_wrapper

    return decorator

def _handle_exception(
    exception: Exception,
    func_name: str,
    args: tuple,
    kwargs: dict,
    default_return: Any,
    log_errors: bool
) -> Any:
    """Internal exception handling logic"""
    if log_errors:
        error_info = {
            'function': func_name,
            'exception_type': type(exception).__name__,
            'exception_message': str(exception),
            'args_count': len(args),
            'kwargs_keys': list(kwargs.keys()),
            'timestamp': datetime.now(timezone.utc).isoformat()
        }

        logger.error(f"❌ Error in {func_name}: {exception}")
        logger.debug(f"📋 Error details: {error_info}")
        logger.debug(f"🔍 Traceback: {traceback.format_exc()}")

    return default_return() if callable(default_return) else default_return
