from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

# Async-safe storage for correlation ID
_correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

def get_correlation_id() -> Optional[str]:
    return _correlation_id_var.get()

@contextmanager
def bind_correlation_id(correlation_id: Optional[str]) -> Iterator[None]:
    """Tag every log record emitted inside the block with ``correlation_id``."""
    token = _correlation_id_var.set(correlation_id)
    try:
        yield
    finally:
        _correlation_id_var.reset(token)

class CorrelationIdFilter:
    def filter(self, record):
        record.correlation_id = get_correlation_id() or 'unknown'
        return True
