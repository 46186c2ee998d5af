"""Exceptions raised by validators."""

from . import messages as _messages


class ValidationFailed(ValueError):
    """Raised by passes_or_fail when a record fails validation.

    Attributes:
        errors: MessageBag from the failed check
    """

    def __init__(self, errors: _messages.MessageBag) -> None:
        """Initialize ValidationFailed with the failed check's messages.

        Args:
            errors: MessageBag holding the messages for each failed field
        """
        self.errors = errors
        error_msg = "; ".join(
            f"{field}: {', '.join(messages)}"
            for field, messages in errors.messages.items()
        )
        super().__init__(f"Validation failed: {error_msg}")
