from __future__ import annotations
from typing import Optional


class JsonHomeError(Exception):
    """Base class of the json-home construction errors.

    These are configuration errors of whoever declared the resources. They
    are not ValueErrors: raised from a pydantic validator they propagate as
    they are, not as a ValidationError.
    """

    def __init__(self, message: str, relation_type: Optional[str] = None) -> None:
        self.message = message
        self.relation_type = relation_type
        if relation_type is not None:
            message = f"{relation_type}: {message}"
        super().__init__(message)

    def for_relation_type(self, relation_type: str) -> "JsonHomeError":
        """Same error, attributed to `relation_type`."""
        return type(self)(self.message, relation_type=relation_type)


class InvalidHintsError(JsonHomeError):
    """accept-put / accept-post declared for a method that is not allowed."""


class InvalidResourceLinkError(JsonHomeError):
    """Link is neither a direct nor a well-formed templated link."""


class ConflictingResourceLinkError(JsonHomeError):
    """Two links for the same relation type disagree on their href or template."""
