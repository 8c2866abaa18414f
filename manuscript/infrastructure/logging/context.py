"""Request-scoped correlation IDs for log records."""

import contextvars
import uuid

correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("correlation_id")


def set_correlation_id(correlation_id: str) -> contextvars.Token[str]:
    """Set the correlation ID for the current request context.

    Returns:
        Token that can be passed to reset_correlation_id()
    """
    return correlation_id_var.set(correlation_id)


def reset_correlation_id(token: contextvars.Token[str]) -> None:
    """Restore the correlation ID that was active before set_correlation_id()."""
    correlation_id_var.reset(token)


def get_correlation_id() -> str | None:
    try:
        return correlation_id_var.get()
    except LookupError:
        return None


def generate_correlation_id() -> str:
    return str(uuid.uuid4())
