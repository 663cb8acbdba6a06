import time
import logging
from functools import wraps
from typing import Optional

from prometheus_client import Counter, Histogram, Info, generate_latest
from prometheus_client.core import CollectorRegistry

from forceclass import __version__

logger = logging.getLogger(__name__)

# Prometheus Registry
REGISTRY = CollectorRegistry()

# Classification metrics
records_classified_total = Counter(
    'forceclass_records_classified_total',
    'Unit variants classified into model records',
    ['unit_type'],
    registry=REGISTRY
)

records_skipped_total = Counter(
    'forceclass_records_skipped_total',
    'Unit summaries skipped during catalog build',
    ['reason'],
    registry=REGISTRY
)

entity_loads_total = Counter(
    'forceclass_entity_loads_total',
    'Full entity loads issued by the quad resolver',
    ['outcome'],
    registry=REGISTRY
)

operation_duration_seconds = Histogram(
    'forceclass_operation_duration_seconds',
    'Duration of tracked operations in seconds',
    ['service', 'method'],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0],
    registry=REGISTRY
)

system_info = Info(
    'forceclass_info',
    'System information',
    registry=REGISTRY
)
system_info.info({'version': __version__, 'service': 'forceclass'})


def get_prometheus_metrics() -> bytes:
    """Current registry contents in the Prometheus text format"""
    return generate_latest(REGISTRY)


def track_performance(service_name: Optional[str] = None):
    """
    Decorator to time an async operation into the duration histogram

    Usage:
    @track_performance(service_name="QuadChassisResolver")
    async def my_method(self, param1):
        ...
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            actual_service_name = service_name or (args[0].__class__.__name__ if args else "Unknown")
            method_name = func.__name__

            start_time = time.time()
            success = False
            try:
                result = await func(*args, **kwargs)
                success = True
                return result
            except Exception as e:
                logger.error(f"Error in {actual_service_name}.{method_name}: {e}")
                raise
            finally:
                duration_seconds = time.time() - start_time
                operation_duration_seconds.labels(
                    service=actual_service_name,
                    method=method_name
                ).observe(duration_seconds)

                logger.info(
                    f"Method executed: {actual_service_name}.{method_name}",
                    extra={
                        'service_name': actual_service_name,
                        'method_name': method_name,
                        'duration_ms': duration_seconds * 1000,
                        'success': success,
                    }
                )

        return wrapper
    return decorator
