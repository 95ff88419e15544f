"""Background job dispatching."""

from .dispatcher import ErrorObserver, Job, JobDispatcher, SubmitResult

__all__ = [
    "ErrorObserver",
    "Job",
    "JobDispatcher",
    "SubmitResult",
]
