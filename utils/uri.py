import re
from typing import List
from urllib.parse import urljoin, urlsplit

# RFC 6570 expression: {var}, {+var}, {?a,b}, {/path*}, {var:3}, ...
_EXPRESSION = re.compile(r"\{([^{}]*)\}")
_OPERATORS = "+#./;?&=,!@|"
_VARNAME = re.compile(r"^(?:[A-Za-z0-9_]|%[0-9A-Fa-f]{2})(?:\.?(?:[A-Za-z0-9_]|%[0-9A-Fa-f]{2}))*$")


def is_absolute(uri: str) -> bool:
    """True if the URI has a scheme (http://..., urn:...)."""
    return bool(urlsplit(uri).scheme)


def resolve_uri(base: str, reference: str) -> str:
    """
    Resolve a URI reference against a base URI (RFC 3986, section 5).

    Absolute references are returned verbatim; scheme-relative, path-absolute,
    path-relative and bare file names are resolved against `base`.
    """
    if is_absolute(reference):
        return reference
    return urljoin(base, reference)


def prefix_uri(base: str, path: str) -> str:
    """
    Append a path (or URI template) to a base URI.

    Unlike resolve_uri, a path below the base stays below it:
    prefix_uri("http://example.org/api", "/products") is
    "http://example.org/api/products".
    """
    if is_absolute(path):
        return path
    if not path:
        return base
    return base.rstrip("/") + "/" + path.lstrip("/")


def template_variables(template: str) -> List[str]:
    """
    Names of the variables of a URI template, in order of appearance.

    Raises ValueError for unbalanced braces or malformed variable names.
    """
    if template.count("{") != template.count("}"):
        raise ValueError(f"Unbalanced braces in URI template {template!r}")
    names: List[str] = []
    for expression in _EXPRESSION.findall(template):
        if expression and expression[0] in _OPERATORS:
            expression = expression[1:]
        for varspec in expression.split(","):
            name = varspec.split(":", 1)[0].rstrip("*")
            if not _VARNAME.match(name):
                raise ValueError(f"Invalid variable {varspec!r} in URI template {template!r}")
            if name not in names:
                names.append(name)
    return names
