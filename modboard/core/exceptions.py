"""Domain errors translated to HTTP responses at the edge."""


class InvalidParametersError(Exception):
    """Request parameters are missing or have the wrong shape."""

    status_code = 400

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg


class ReportNotFoundError(LookupError):
    def __init__(self, report_id: int) -> None:
        super().__init__(f"Report {report_id} not found")
        self.report_id = report_id


class ReportValidationError(ValueError):
    """Raised when a new report cannot be filed."""


class FeaturedTagError(ValueError):
    """Raised when a featured tag cannot be created."""
