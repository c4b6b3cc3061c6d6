# messenger/domain/exceptions.py


class MessengerError(Exception):
    """Base class for every failure a core operation can report."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(MessengerError):
    """A referenced id does not exist."""


class ConflictError(MessengerError):
    """A uniqueness rule was violated, e.g. a taken username."""


class ForbiddenError(MessengerError):
    """The caller may not act on the resource."""


class InvalidAddressingError(MessengerError):
    """A message names zero or two destinations."""


class ValidationError(MessengerError):
    """A required field is missing or malformed."""
