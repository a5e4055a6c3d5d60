# handler_wrappers.py
"""Shared error handling for tool handlers.

Error Handling Strategy:
    A failed Consul request inside a tool is raised as BackendError, carrying
    the operation being performed and (where the tool has one) the identifier
    it was performed on. The _error_handler wrapper catches BackendError, logs
    it, and returns its text as a normal tool result, so a Consul failure
    never surfaces as a protocol-level error. Any other exception is a bug in
    the tool: it is logged with its traceback and re-raised, and FastMCP
    reports it with isError=True.
"""

from typing import Any, Awaitable, Callable, Optional
from functools import wraps
import logging

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# BackendError - Consul call failed while performing a tool operation
# ------------------------------------------------------------------------------
# - operation: What the tool was doing, e.g. "registering service"
# - identifier: The argument value the operation applied to (optional)
#
# str(error) is the text returned to the client:
#   BackendError("registering service", "web")  -> "Error registering service: web"
#   BackendError("listing sessions")            -> "Error listing sessions"
# ------------------------------------------------------------------------------
class BackendError(Exception):
    """Structured error for a failed backend call.

    Args:
        operation: Description of the operation that failed
        identifier: The key, ID or name the operation applied to (optional)
    """
    def __init__(self, operation: str, identifier: Optional[Any] = None):
        self.operation = operation
        self.identifier = identifier
        super().__init__(self.text)

    @property
    def text(self) -> str:
        if self.identifier is None or self.identifier == "":
            return f"Error {self.operation}"
        return f"Error {self.operation}: {self.identifier}"


# ------------------------------------------------------------------------------
# _error_handler - Outermost wrapper around every tool handler
# ------------------------------------------------------------------------------
# BackendError -> logged at WARNING with its cause, text returned to client.
# Other exceptions -> logged with traceback, re-raised for FastMCP to report.
# ------------------------------------------------------------------------------
def _error_handler(func: Callable[..., Awaitable[str]]) -> Callable[..., Awaitable[str]]:
    """Wrap a handler so backend failures become text responses.

    Args:
        func: The async handler function to wrap

    Returns:
        Wrapped function returning the error text on BackendError
    """
    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> str:
        try:
            return await func(*args, **kwargs)
        except BackendError as e:
            logger.warning("%s (cause: %s)", e.text, e.__cause__)
            return e.text
        except Exception as e:
            logger.exception("Unexpected handler error: %s", e)
            raise

    return wrapper
