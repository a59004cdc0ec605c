"""Open file limit discovery."""

from __future__ import annotations

try:
    import resource
except ImportError:  # platforms without POSIX resource limits
    resource = None  # type: ignore[assignment]

DEFAULT_FILE_LIMIT = 10000


def get_file_limit() -> int:
    """Raise the open file soft limit to the hard limit and return the usable count."""
    limit = DEFAULT_FILE_LIMIT
    if resource is None:
        return limit

    try:
        _, hard = resource.getrlimit(resource.RLIMIT_NOFILE)
        resource.setrlimit(resource.RLIMIT_NOFILE, (hard, hard))
    except (ValueError, OSError):
        pass

    try:
        soft, _ = resource.getrlimit(resource.RLIMIT_NOFILE)
    except (ValueError, OSError):
        return limit
    if soft != resource.RLIM_INFINITY and soft < limit:
        limit = soft
    return limit