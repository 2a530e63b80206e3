class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the admin password is wrong."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""


class ReasonRequired(ValidationError):
    """A reason must be typed before the check-in may continue."""


class UnknownStaff(ValidationError):
    """No staff member matches the entered id."""


class PositionError(DomainError):
    """Base for every failure to obtain a position sample."""


class PositionUnavailable(PositionError):
    pass


class PermissionDenied(PositionError):
    pass


class PositionTimeout(PositionError):
    pass


class OutOfRange(DomainError):
    """Measured position is farther from the office than allowed."""

    def __init__(self, distance: float, allowed: float):
        self.distance = distance
        self.allowed = allowed
        super().__init__(f"อยู่นอกพื้นที่: ระยะห่าง {round(distance)} เมตร (อนุญาต {allowed} เมตร)")


class CameraUnavailable(DomainError):
    """Camera stream could not be opened or produced no frame."""


class AnalysisUnavailable(DomainError):
    """Image analysis failed; never blocks a commit."""


class RemotePushFailed(DomainError):
    """Remote sheet did not acknowledge a record."""


class RemoteUnavailable(DomainError):
    """Remote sheet could not be read."""
