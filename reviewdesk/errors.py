"""Error taxonomy shared by the API blueprints.

Every error carries its HTTP status so the app-level handler can render it
without knowing which blueprint raised it.
"""


class ReviewDeskError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None, details=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details

    def to_dict(self):
        body = {"success": False, "error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(ReviewDeskError):
    status_code = 400
    message = "Validation failed"

    @classmethod
    def for_field(cls, field, msg):
        return cls(details={field: [msg]})


class NotFoundError(ReviewDeskError):
    status_code = 404

    def __init__(self, resource, details=None):
        self.resource = resource
        super().__init__(f"{resource.capitalize()} not found", details)


class AuthorizationError(ReviewDeskError):
    status_code = 403
    message = "Not allowed"


class DuplicateReviewError(ReviewDeskError):
    status_code = 409
    message = "You have already reviewed this applicant"


class UpstreamError(ReviewDeskError):
    """Failure in a best-effort side effect (fan-out, audit). Never rendered."""
