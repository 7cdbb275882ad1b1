"""API dependencies for dependency injection."""

from actiongate.config import get_gateway_config
from actiongate.runtimes import DockerRuntime

# Runtime shared by all requests, set up by the application lifespan
_runtime: DockerRuntime | None = None


def init_runtime() -> DockerRuntime:
    """Initialize runtime singleton.

    Creates the DockerRuntime bound to the configured Docker socket.
    Must be called during app startup.
    """
    global _runtime
    _runtime = DockerRuntime(get_gateway_config())
    return _runtime


async def close_runtime() -> None:
    """Close runtime and release resources."""
    global _runtime
    if _runtime:
        await _runtime.close()
        _runtime = None


def get_runtime() -> DockerRuntime:
    """Get runtime singleton.

    Returns:
        DockerRuntime instance shared across all API endpoints.

    Raises:
        RuntimeError: If called before init_runtime().
    """
    if _runtime is None:
        raise RuntimeError("Runtime not initialized. Call init_runtime() first.")
    return _runtime


def reset_runtime() -> None:
    """Reset runtime singleton (for testing)."""
    global _runtime
    _runtime = None
