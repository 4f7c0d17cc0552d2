from typing import Any, Dict, List

from models.hints import Authentication, Hints, Status
from models.json_home import JsonHome
from models.resource_link import ResourceLink


# -----------------------------------------------------------------------------
# Hints
# -----------------------------------------------------------------------------
def build_auth_req(authentication: Authentication) -> Dict[str, Any]:
    auth: Dict[str, Any] = {"scheme": authentication.scheme}
    if authentication.realms:
        auth["realms"] = list(authentication.realms)
    return auth


def build_hints(hints: Hints) -> Dict[str, Any]:
    wire: Dict[str, Any] = {}
    if hints.allowed_methods:
        wire["allow"] = [method.value for method in hints.allows]
    if hints.representations:
        wire["representations"] = list(hints.representations)
    if hints.accept_put:
        wire["accept-put"] = list(hints.accept_put)
    if hints.accept_post:
        wire["accept-post"] = list(hints.accept_post)
    if hints.precondition_req:
        wire["precondition-req"] = [precondition.value for precondition in hints.precondition_req]
    if hints.auth_req:
        wire["auth-req"] = [build_auth_req(auth) for auth in hints.auth_req]
    if hints.status is not Status.OK:
        wire["status"] = hints.status.value
    if hints.docs.link is not None:
        wire["docs"] = hints.docs.link
    return wire


# -----------------------------------------------------------------------------
# Resources
# -----------------------------------------------------------------------------
def build_resource(link: ResourceLink) -> Dict[str, Any]:
    resource: Dict[str, Any] = {}
    if link.is_templated:
        resource["href-template"] = link.href_template
        resource["href-vars"] = {
            href_var.var: href_var.var_type or f"{link.relation_type}#{href_var.var}"
            for href_var in link.href_vars
        }
    else:
        resource["href"] = link.href
    resource["hints"] = build_hints(link.hints)
    return resource


def build_json_home(json_home: JsonHome) -> Dict[str, Any]:
    """The json-home document as it goes over the wire."""
    return {
        "resources": {
            link.relation_type: build_resource(link)
            for link in json_home.links
        }
    }


def build_relation_type_docs(link: ResourceLink) -> Dict[str, Any]:
    """Human-readable documentation of a relation type and its href variables."""
    docs = link.hints.docs
    href_vars: List[Dict[str, Any]] = [
        {
            "var": href_var.var,
            "var-type": href_var.var_type,
            "description": list(href_var.docs.description),
        }
        for href_var in link.href_vars
    ]
    return {
        "rel": link.relation_type,
        "description": list(docs.description),
        "detailed-description": docs.detailed_description,
        "link": docs.link,
        "href-vars": href_vars,
    }
