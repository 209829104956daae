#!/usr/bin/env python3
"""
HTTP helpers shared by the SpareBank1 and YNAB clients.

Every request either returns parsed JSON or raises RemoteError carrying the
status code and raw body. No retries.
"""

import logging
from typing import Any

import requests

from .errors import RemoteError

logger = logging.getLogger(__name__)


def extract_error_detail(response: requests.Response) -> str:
    """Extract the most useful error text from an API error response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("detail"):
            return str(error["detail"])
        if isinstance(error, str) and payload.get("error_description"):
            return f"{error}: {payload['error_description']}"
    return response.text


def request_json(
    session: requests.Session,
    method: str,
    url: str,
    *,
    timeout: int,
    **kwargs: Any,
) -> Any:
    """
    Send a request and decode its JSON body.

    Raises:
        RemoteError: On transport failure, non-2xx status or non-JSON body
    """
    logger.debug(f"{method} {url}")
    try:
        response = session.request(method, url, timeout=timeout, **kwargs)
    except requests.RequestException as e:
        raise RemoteError(f"{method} request failed: {e}", url=url) from e

    if not response.ok:
        logger.error(f"{method} {url} returned {response.status_code}: {extract_error_detail(response)}")
        raise RemoteError(
            f"{method} request was rejected",
            status_code=response.status_code,
            body=response.text,
            url=url,
        )

    try:
        return response.json()
    except ValueError as e:
        raise RemoteError(
            "Response body is not valid JSON",
            status_code=response.status_code,
            body=response.text,
            url=url,
        ) from e
