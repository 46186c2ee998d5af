"""Action tokens used to scope rule tables."""

from enum import Enum


class Action(str, Enum):
    """Actions a rule table can be keyed by.

    Attributes:
        CREATE: Rules applied when a new record is validated
        UPDATE: Rules applied when an existing record is validated
    """

    CREATE = "create"
    UPDATE = "update"
