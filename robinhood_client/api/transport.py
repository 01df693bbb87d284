from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from ..errors import AuthenticationError, DecodeError, TransportError

ModelT = TypeVar("ModelT", bound=BaseModel)

_RAW_LIMIT = 500

logger = logging.getLogger(__name__)


def send(
    session: requests.Session,
    method: str,
    url: str,
    *,
    timeout: Optional[float] = None,
    raise_for_status: bool = True,
    **kwargs: Any,
) -> requests.Response:
    """Issue one request and map failures to the client's exception hierarchy."""
    try:
        resp = session.request(method, url, timeout=timeout, **kwargs)
    except requests.exceptions.Timeout as exc:
        logger.error("request_timeout", extra={"method": method, "url": url})
        raise TransportError(f"Request timed out: {method} {url}") from exc
    except requests.exceptions.RequestException as exc:
        logger.error("request_failed", extra={"method": method, "url": url, "error": str(exc)})
        raise TransportError(f"Request failed: {method} {url}: {exc}") from exc

    logger.debug("response", extra={"method": method, "url": url, "status_code": resp.status_code})
    if raise_for_status:
        check_response(resp, method, url)
    return resp


def check_response(resp: requests.Response, method: str, url: str) -> None:
    if resp.status_code < 400:
        return

    raw = resp.text[:_RAW_LIMIT]
    logger.warning("http_error", extra={"method": method, "url": url, "status_code": resp.status_code})

    if resp.status_code in (401, 403):
        raise AuthenticationError(
            f"Not authorized ({resp.status_code}): {method} {url}",
            status_code=resp.status_code,
            raw_response=raw,
        )

    raise TransportError(
        f"HTTP {resp.status_code}: {method} {url}",
        status_code=resp.status_code,
        raw_response=raw,
    )


def decode(resp: requests.Response, model: Type[ModelT]) -> ModelT:
    try:
        return model.model_validate_json(resp.content)
    except ValidationError as exc:
        logger.error(
            "decode_failed",
            extra={"url": resp.url, "model": model.__name__, "errors": exc.error_count()},
        )
        raise DecodeError(
            f"Unexpected {model.__name__} payload from {resp.url}: {exc}",
            status_code=resp.status_code,
            raw_response=resp.text[:_RAW_LIMIT],
        ) from exc
