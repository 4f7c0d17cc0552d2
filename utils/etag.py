import hashlib
from typing import Any, Optional

from fastapi import Request, Response
from pydantic import BaseModel


def generate_etag(data: Any) -> str:
    """
    Generate a strong ETag from the representation.

    Bytes are hashed as they are; Pydantic models by their JSON representation.
    """
    if isinstance(data, bytes):
        content = data
    elif isinstance(data, BaseModel):
        content = data.model_dump_json().encode('utf-8')
    else:
        # Fallback to string representation
        content = str(data).encode('utf-8')

    etag_hash = hashlib.md5(content).hexdigest()
    return f'"{etag_hash}"'


def check_etag_match(request: Request, current_etag: str) -> bool:
    """
    Check if the ETag in the If-None-Match header matches the current ETag.

    Returns True if they match (meaning the client has the current version).
    """
    if_none_match = request.headers.get('if-none-match')
    if not if_none_match:
        return False

    # Handle multiple ETags in the header (comma-separated), weak or strong
    client_etags = [etag.strip().removeprefix('W/') for etag in if_none_match.split(',')]

    # Check for wildcard or exact match
    return '*' in client_etags or current_etag in client_etags


def set_etag_headers(response: Response, etag: str, max_age: Optional[int] = None) -> None:
    """
    Set ETag and Cache-Control headers on the response.
    """
    response.headers['ETag'] = etag
    response.headers['Cache-Control'] = cache_control(max_age)


def cache_control(max_age: Optional[int]) -> str:
    if max_age:
        return f'public, max-age={max_age}'
    return 'private, max-age=0, must-revalidate'


def handle_conditional_request(request: Request, data: Any) -> tuple[str, bool]:
    """
    Handle conditional requests with ETag support.

    Returns:
        tuple: (etag, should_return_304)
            - etag: The generated ETag for the data
            - should_return_304: True if should return 304 Not Modified
    """
    current_etag = generate_etag(data)

    if check_etag_match(request, current_etag):
        return current_etag, True

    return current_etag, False
