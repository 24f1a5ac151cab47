"""Base exception for per-session chat failures."""


class ChatError(Exception):
    """Failure scoped to a single session.

    Every subclass carries a machine-readable ``error_code`` (used in
    structured-protocol replies and logs) and a human-readable message.

    Attributes:
        error_code: Machine-parseable error identifier.
        message: Human-readable error description.
    """

    error_code = "chat_error"

    def __init__(self, message: str, *, error_code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code


__all__ = ["ChatError"]
