from __future__ import annotations
from enum import Enum
from typing import FrozenSet, Iterable, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from models.docs import Docs
from models.exceptions import InvalidHintsError
from utils.ordered_set import ordered_union


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------
class Allow(str, Enum):
    """HTTP methods allowed on a resource. Declaration order is the wire order."""
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"


class Precondition(str, Enum):
    """Conditional request mechanism required by state-changing methods"""
    ETAG = "etag"                    # If-Match
    LAST_MODIFIED = "last-modified"  # If-Unmodified-Since


class Status(str, Enum):
    """Lifecycle of a relation type"""
    OK = "ok"
    DEPRECATED = "deprecated"   # still served, clients should migrate
    GONE = "gone"               # not served anymore

    def merge_with(self, other: Status) -> Status:
        """The more advanced of both lifecycle stages."""
        if _STATUS_ORDER[other] > _STATUS_ORDER[self]:
            return other
        return self


_STATUS_ORDER = {status: rank for rank, status in enumerate(Status)}


def ordered_methods(methods: Iterable[Allow]) -> Tuple[Allow, ...]:
    methods = set(methods)
    return tuple(method for method in Allow if method in methods)


# -----------------------------------------------------------------------------
# Authentication
# -----------------------------------------------------------------------------
class Authentication(BaseModel):
    """The resource requires authentication using the HTTP Authentication Framework."""
    scheme: str = Field(
        ...,
        min_length=1,
        description="Authentication scheme",
        examples=["Basic", "Digest", "Bearer"]
    )
    realms: Tuple[str, ...] = Field(
        (),
        description="Protection spaces the resource belongs to"
    )

    model_config = ConfigDict(frozen=True)


def auth_req(scheme: str, realms: Iterable[str] = ()) -> Authentication:
    return Authentication(scheme=scheme, realms=tuple(realms))


# -----------------------------------------------------------------------------
# Hints
# -----------------------------------------------------------------------------
class Hints(BaseModel):
    """
    Hints of a resource link, see draft-nottingham-json-home, section 5.

    Immutable. Merging two Hints returns a new instance. A Hints instance
    never accepts request bodies for PUT or POST unless the method itself is
    allowed; constructing one that does raises InvalidHintsError.
    """
    allowed_methods: FrozenSet[Allow] = Field(
        frozenset(),
        description="HTTP methods allowed on the resource"
    )
    representations: Tuple[str, ...] = Field(
        (),
        description="Media types served, in order of preference"
    )
    accept_put: Tuple[str, ...] = Field(
        (),
        description="Media types accepted as PUT request bodies"
    )
    accept_post: Tuple[str, ...] = Field(
        (),
        description="Media types accepted as POST request bodies"
    )
    precondition_req: Tuple[Precondition, ...] = Field(
        (),
        description="Preconditions required by state-changing requests"
    )
    auth_req: Tuple[Authentication, ...] = Field(
        (),
        description="Authentication schemes the resource requires"
    )
    status: Status = Field(
        Status.OK,
        description="Lifecycle status of the relation type"
    )
    docs: Docs = Field(
        default_factory=Docs,
        description="Human-readable documentation"
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def accept_requires_allow(self) -> Hints:
        if self.accept_post and Allow.POST not in self.allowed_methods:
            raise InvalidHintsError("POST is not allowed but accept-post is provided.")
        if self.accept_put and Allow.PUT not in self.allowed_methods:
            raise InvalidHintsError("PUT is not allowed but accept-put is provided.")
        return self

    @property
    def allows(self) -> Tuple[Allow, ...]:
        """Allowed methods in wire order."""
        return ordered_methods(self.allowed_methods)

    def merge_with(self, other: Hints) -> Hints:
        """
        Merges the hints of two declarations of the same relation type.

        :param other: the hints of the other declaration
        :return: a new Hints instance; neither operand is modified
        """
        return Hints(
            allowed_methods=self.allowed_methods | other.allowed_methods,
            representations=ordered_union(self.representations, other.representations),
            accept_put=ordered_union(self.accept_put, other.accept_put),
            accept_post=ordered_union(self.accept_post, other.accept_post),
            precondition_req=ordered_union(self.precondition_req, other.precondition_req),
            auth_req=ordered_union(self.auth_req, other.auth_req),
            status=self.status.merge_with(other.status),
            docs=self.docs.merge_with(other.docs),
        )

    def __repr_args__(self):
        for name, value in super().__repr_args__():
            if name == "allowed_methods":
                value = self.allows
            yield name, value
