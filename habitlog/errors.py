"""Error kinds raised by the crud layer and rendered by the API.

Every error carries a stable ``kind`` string and the HTTP status it maps to,
so callers can tell a missing habit from a bad interval without parsing
messages.
"""


class HabitLogError(Exception):
    status_code: int = 500
    kind: str = "internal"
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"detail": self.message, "error": self.kind}


class NotFoundError(HabitLogError):
    status_code = 404
    kind = "not_found"
    default_message = "Not found"


class InvalidInputError(HabitLogError):
    status_code = 400
    kind = "invalid_input"
    default_message = "Invalid input"


class ConflictError(HabitLogError):
    status_code = 409
    kind = "conflict"
    default_message = "Conflicting write"


class UnauthorizedError(HabitLogError):
    status_code = 401
    kind = "unauthorized"
    default_message = "Please authenticate"


class InternalError(HabitLogError):
    pass
