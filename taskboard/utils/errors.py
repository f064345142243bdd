"""Error handling utilities."""


class TaskboardError(Exception):
    """Base exception for the taskboard backend."""
    pass


class InvalidDateError(TaskboardError, ValueError):
    """Malformed date input (recovered locally as an absent date)."""
    pass


class AuthenticationError(TaskboardError):
    """Operation requires an authenticated identity."""
    pass


class SupabaseError(TaskboardError):
    """Supabase operation error."""
    pass


class TaskNotFoundError(SupabaseError):
    """No task row matched the given id."""
    pass
