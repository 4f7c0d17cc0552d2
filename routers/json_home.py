import json
from urllib.parse import urlsplit

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from services.source import JsonHomeSource
from utils.etag import cache_control, handle_conditional_request, set_etag_headers
from utils.json_home import build_json_home, build_relation_type_docs

JSON_HOME_MEDIA_TYPE = "application/json-home"


router = APIRouter(
    tags=["json-home"],
)


def get_json_home_source(request: Request) -> JsonHomeSource:
    return request.app.state.json_home_source


# -----------------------------------------------------------------------------
# GET Endpoints
# -----------------------------------------------------------------------------

@router.get("/json-home", status_code=200, name="get_json_home", response_class=Response)
def get_json_home(
    request: Request,
    source: JsonHomeSource = Depends(get_json_home_source),
):
    """The json-home document of this application (ETag support)"""

    json_home = source.get_json_home()
    body = json.dumps(build_json_home(json_home), indent=2).encode("utf-8")
    max_age = int(source.max_age) if source.max_age is not None else None

    etag, should_return_304 = handle_conditional_request(request, body)
    if should_return_304:
        return Response(
            status_code=status.HTTP_304_NOT_MODIFIED,
            headers={"ETag": etag, "Cache-Control": cache_control(max_age)},
        )

    response = Response(content=body, media_type=JSON_HOME_MEDIA_TYPE)
    set_etag_headers(response, etag, max_age)
    return response


@router.get("/rel/{rel_path:path}", status_code=200, name="get_relation_type")
def get_relation_type(
    rel_path: str,
    source: JsonHomeSource = Depends(get_json_home_source),
):
    """Documentation of the relation type /rel/{rel_path}"""

    path = f"/rel/{rel_path}"
    json_home = source.get_json_home()
    for link in json_home.links:
        if urlsplit(link.relation_type).path == path:
            return build_relation_type_docs(link)

    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Unknown relation type {path}",
    )
