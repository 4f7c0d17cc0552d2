from __future__ import annotations
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.docs import DocDeclaration
from models.hints import Allow, Authentication, Precondition, Status
from models.resource_link import VarConstraint


# -----------------------------------------------------------------------------
# Pydantic Schemas
# -----------------------------------------------------------------------------
class HrefVarDeclaration(BaseModel):
    constraint: Optional[VarConstraint] = Field(
        None,
        description="Rule values of the variable must satisfy"
    )
    doc: Optional[DocDeclaration] = Field(
        None,
        description="Documentation of the variable"
    )


class ResourceDeclaration(BaseModel):
    """
    One endpoint mapping (HTTP method plus media types) of a resource, as
    declared by a scanner. Several declarations may share a relation type.
    """
    rel: str = Field(
        ...,
        min_length=1,
        description="Relation type, absolute or relative to the relation type base URI",
        examples=["/rel/products"]
    )
    href: Optional[str] = Field(
        None,
        description="Path or URI of a direct link",
        examples=["/products"]
    )
    href_template: Optional[str] = Field(
        None,
        alias="href-template",
        description="Path or URI template of a templated link",
        examples=["/products/{productId}"]
    )
    href_vars: Dict[str, HrefVarDeclaration] = Field(
        default_factory=dict,
        alias="href-vars"
    )
    allow: List[Allow] = Field(default_factory=list)
    representations: List[str] = Field(default_factory=list)
    accept_put: List[str] = Field(default_factory=list, alias="accept-put")
    accept_post: List[str] = Field(default_factory=list, alias="accept-post")
    precondition_req: List[Precondition] = Field(default_factory=list, alias="precondition-req")
    auth_req: List[Authentication] = Field(default_factory=list, alias="auth-req")
    status: Status = Status.OK
    doc: Optional[DocDeclaration] = None

    model_config = ConfigDict(populate_by_name=True)


class ResourceCatalog(BaseModel):
    """Everything a scanner found: relation-level docs and endpoint mappings."""
    docs: List[DocDeclaration] = Field(
        default_factory=list,
        description="Documentation declared once per relation type"
    )
    resources: List[ResourceDeclaration] = Field(default_factory=list)
