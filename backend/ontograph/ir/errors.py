from typing import Optional


class OntoGraphError(Exception):
    """Base class for errors raised while rendering an ontology graph."""

    def __init__(self, message: str, object_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.object_id = object_id


class MalformedInputError(OntoGraphError):
    """The pre-resolved ontology records cannot be rendered as given."""


class RequestValidationError(MalformedInputError):
    """One or more render request fields are missing or invalid."""

    def __init__(self, messages):
        self.messages = list(messages)
        super().__init__("\n".join(self.messages))


class UnknownRelationKindError(AssertionError):
    """A relationship tag outside the closed set reached the engine."""
