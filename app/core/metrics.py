import time
import uuid
import logging
from functools import wraps
from typing import Optional

from core.prometheus_metrics import prometheus_collector
from services.exceptions import AutoDomainError, DatabaseQueryError

_fallback_logger = logging.getLogger("auto.metrics")


def track_performance(service_name: Optional[str] = None):
    """
    Decorator to automatically track service method performance

    Usage:
    @track_performance(service_name="AutoService")
    async def find_by_id(self, id):
        # method implementation

    Domain errors (not found, outdated version, ...) are counted as
    'rejected', everything else raised as 'error'. The logger injected into
    the service instance is used when present.
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            correlation_id = str(uuid.uuid4())

            instance = args[0] if args else None
            actual_service_name = service_name or (instance.__class__.__name__ if instance else "Unknown")
            method_name = func.__name__
            logger = getattr(instance, "logger", None) or _fallback_logger

            start_time = time.perf_counter()
            status = "error"

            try:
                result = await func(*args, **kwargs)
                status = "success"
                return result

            except DatabaseQueryError as e:
                logger.error(f"Error in {actual_service_name}.{method_name}: {e}")
                raise

            except AutoDomainError:
                status = "rejected"
                raise

            except Exception as e:
                logger.error(f"Error in {actual_service_name}.{method_name}: {e}")
                raise

            finally:
                duration_seconds = time.perf_counter() - start_time

                prometheus_collector.record_service_call(
                    service_name=actual_service_name,
                    method_name=method_name,
                    duration_seconds=duration_seconds,
                    status=status,
                )

                logger.debug(
                    f"Method executed: {actual_service_name}.{method_name}",
                    extra={
                        'correlation_id': correlation_id,
                        'service_name': actual_service_name,
                        'method_name': method_name,
                        'duration_ms': duration_seconds * 1000,
                        'status': status,
                    }
                )

        return wrapper
    return decorator
