"""
Request pipeline steps.

Every request passes the access log. Routes opt into the rest through their
dependencies, always in this order: body parser, API key check, product
validation.
"""
import json
import logging
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Header, Request

from .config import Settings, get_settings
from .core import validate_product_payload
from .errors import ApiError, AuthenticationFailure, Failure


def install_access_log(app: FastAPI, logger: logging.Logger) -> None:
    @app.middleware("http")
    async def access_log(request: Request, call_next):
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        logger.info("%s %s", request.method, target)
        return await call_next(request)


async def json_body(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise ApiError(Failure.validation("Malformed JSON body."))
    if not isinstance(body, dict):
        raise ApiError(Failure.validation("Request body must be a JSON object."))
    return body


def require_api_key(
    x_api_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    if not x_api_key or x_api_key != settings.api_key:
        raise AuthenticationFailure()


def validated_product(body: Dict[str, Any] = Depends(json_body)) -> Dict[str, Any]:
    failure = validate_product_payload(body)
    if failure is not None:
        raise ApiError(failure)
    return body
