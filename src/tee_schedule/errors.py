"""Error hierarchy for schedule loading and configuration review.

Store failures are split into transient (retried by the HTTP store) and
permanent ones, so tenacity can classify them by exception type:

    AsyncRetrying(retry=retry_if_exception_type(StoreUnavailableError), ...)

Resolution itself never raises on a well-formed configuration.
"""


class ScheduleError(Exception):
    """Base exception for all schedule errors."""

    pass


class ScheduleNotFoundError(ScheduleError):
    """No schedule is configured for the course."""

    def __init__(self, course_id: str):
        super().__init__(f"No schedule configured for course {course_id!r}")
        self.course_id = course_id


class ScheduleStoreError(ScheduleError):
    """The configuration store could not serve the request."""

    pass


class StoreUnavailableError(ScheduleStoreError):
    """Temporary store failure that may succeed on retry.

    Examples: connection errors, timeouts, 5xx responses.
    """

    pass


class InvalidScheduleError(ScheduleError):
    """A stored document failed validation and cannot be resolved."""

    pass


class ScheduleConflictError(ScheduleError):
    """Overlapping rules whose precedence would be decided by list order alone."""

    def __init__(self, conflicts):
        self.conflicts = list(conflicts)
        details = "; ".join(conflict.describe() for conflict in self.conflicts)
        super().__init__(f"Ambiguous schedule rules: {details}")
