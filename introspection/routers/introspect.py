"""API for token introspection."""

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import ORJSONResponse

from core.consts import INTROSPECTION_PATH, OAuth2Param
from introspection.config import settings
from introspection.deps import get_introspection_service
from introspection.services.introspect_service import (
    Active,
    IntrospectionService,
    render_result,
)

FORM_URLENCODED = "application/x-www-form-urlencoded"

router = APIRouter(prefix=settings.OIDC_BASE_PATH)


async def read_token_parameter(request: Request) -> str | None:
    """Return the `token` parameter from the query string or form body.

    The legacy `access_token` name is honoured when `token` is absent. Only
    `application/x-www-form-urlencoded` bodies are read; any other body is ignored.
    """
    params = dict(request.query_params)
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if request.method == "POST" and media_type == FORM_URLENCODED:
        form = await request.form()
        params.update(
            {key: value for key, value in form.items() if isinstance(value, str)}
        )
    token = params.get(OAuth2Param.TOKEN)
    if token is None:
        token = params.get(OAuth2Param.ACCESS_TOKEN)
    return token


@router.api_route(
    INTROSPECTION_PATH,
    methods=["GET", "POST"],
    tags=["protected"],
    response_class=ORJSONResponse,
)
async def introspect(
    request: Request,
    authorization: str | None = Header(None),
    token: str | None = Depends(read_token_parameter),
    service: IntrospectionService = Depends(get_introspection_service),
):
    """Return the introspection payload for `token`; inactive tokens get 200."""
    result = await service.introspect(authorization, token)
    if isinstance(result, Active):
        request.state.client_id = result.response.client_id
    return render_result(result)
