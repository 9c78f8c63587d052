"""Custom exceptions for accel-jump."""


class AccelJumpError(Exception):
    """Base exception for all accel-jump errors."""

    pass


class PreconditionViolation(AccelJumpError):
    """Input recordings or aligned batch inputs are malformed."""

    def __init__(self, message: str = "Input precondition violated") -> None:
        self.message = message
        super().__init__(self.message)


class JumpDetectionError(AccelJumpError):
    """Jump detection algorithm encountered an error."""

    def __init__(self, message: str = "Jump detection error") -> None:
        self.message = message
        super().__init__(self.message)


class NoCandidateFound(JumpDetectionError):
    """No impact spike is preceded by a verified free-fall period."""

    def __init__(self, message: str = "No landing candidate found", candidates: int = 0) -> None:
        self.candidates = candidates
        super().__init__(message)


class OrientationError(AccelJumpError):
    """Reorientation to the vertical reference failed."""

    def __init__(self, message: str = "Reorientation failed") -> None:
        self.message = message
        super().__init__(self.message)
