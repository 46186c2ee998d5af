"""Field-keyed collection of validation messages."""

import typing

import pydantic


class MessageBag(pydantic.BaseModel):
    """Ordered collection of error messages keyed by field.

    Fields keep the order in which their first message was added, and each
    field's messages keep the order they were added in.

    Attributes:
        messages: Dictionary mapping field names to their messages
    """

    messages: dict[str, list[str]] = pydantic.Field(default_factory=dict)

    def add(self, field: str, message: str) -> "MessageBag":
        """Add a message for a field.

        Args:
            field: Field name
            message: Human-readable message

        Returns:
            The bag itself
        """
        self.messages.setdefault(field, []).append(message)
        return self

    def merge(
        self, other: "MessageBag | typing.Mapping[str, typing.Iterable[str]]"
    ) -> "MessageBag":
        """Add every message from another bag or mapping.

        Args:
            other: MessageBag or mapping of field to messages

        Returns:
            The bag itself
        """
        items = other.messages if isinstance(other, MessageBag) else other
        for field, messages in items.items():
            for message in messages:
                self.add(field, message)
        return self

    def all(self) -> list[str]:
        """Return every message flattened in field order."""
        return [m for messages in self.messages.values() for m in messages]

    def get(self, field: str) -> list[str]:
        """Return the messages for a field, empty if there are none."""
        return list(self.messages.get(field, []))

    def first(self, field: str | None = None) -> str | None:
        """Return the first message, overall or for one field.

        Args:
            field: Field name, or None for the first message in the bag

        Returns:
            The message, or None if there is none
        """
        messages = self.all() if field is None else self.messages.get(field, [])
        return messages[0] if messages else None

    def has(self, field: str) -> bool:
        return bool(self.messages.get(field))

    def keys(self) -> list[str]:
        return list(self.messages)

    def count(self) -> int:
        """Return the total number of messages."""
        return sum(len(messages) for messages in self.messages.values())

    def is_empty(self) -> bool:
        return self.count() == 0

    def any(self) -> bool:
        return not self.is_empty()

    def to_dict(self) -> dict[str, list[str]]:
        return {field: list(messages) for field, messages in self.messages.items()}

    def to_json(self, indent: int | None = None) -> str:
        """Serialize the bag as a JSON object of field to messages."""
        return pydantic.TypeAdapter(dict[str, list[str]]).dump_json(
            self.messages, indent=indent
        ).decode()

    def __len__(self) -> int:
        return self.count()

    def __bool__(self) -> bool:
        return self.any()
