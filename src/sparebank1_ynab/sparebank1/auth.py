#!/usr/bin/env python3
"""
SpareBank1 OAuth Token Handling

SpareBank1 rotates refresh tokens: every refresh returns a new refresh token
that must replace the stored one, otherwise the next run cannot authenticate.

Two flows are supported:
- Refresh flow (every sync): stored refresh token -> access token
- Authorization-code flow (setup wizard): browser login -> local callback
  listener -> access + refresh token
"""

import logging
import time
import urllib.parse
from dataclasses import dataclass
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from typing import Any

import requests

from ..core.config import SpareBank1Config
from ..core.errors import AuthError, RemoteError
from ..core.http import request_json

logger = logging.getLogger(__name__)

DEFAULT_AUTH_URL = "https://api-auth.sparebank1.no"
DEFAULT_REDIRECT_PORT = 9050
# The listener binds the same name the redirect URI uses
REDIRECT_HOST = "localhost"
FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}

CALLBACK_SUCCESS_HTML = "<html><body><h1>SpareBank1 login complete</h1><p>You can close this window.</p></body></html>"
CALLBACK_ERROR_HTML = "<html><body><h1>SpareBank1 login failed</h1><p>Check the terminal for details.</p></body></html>"


@dataclass(frozen=True)
class TokenPair:
    """Access and refresh token returned by the token endpoint."""

    access_token: str
    refresh_token: str

    @classmethod
    def from_dict(cls, data: Any) -> "TokenPair":
        if not isinstance(data, dict) or not data.get("access_token") or not data.get("refresh_token"):
            raise AuthError("Token response is missing access_token or refresh_token")
        return cls(access_token=data["access_token"], refresh_token=data["refresh_token"])


def read_refresh_token(path: Path, fallback: str = "") -> str:
    """
    Read the stored refresh token, falling back to the initial one.

    Raises:
        AuthError: If neither the file nor the fallback yields a token
    """
    try:
        token = path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        logger.info(f"No refresh token file at {path}, using initial refresh token")
        token = fallback.strip()
    except OSError as e:
        raise AuthError(f"Could not read refresh token file {path}: {e}") from e

    if not token:
        raise AuthError(f"No refresh token available (file {path} empty and no initial token configured)")
    return token


def save_refresh_token(path: Path, token: str) -> None:
    """Persist a rotated refresh token."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(token, encoding="utf-8")
    except OSError as e:
        raise AuthError(f"Could not write refresh token file {path}: {e}") from e
    logger.debug(f"Saved refresh token to {path}")


def _token_request(auth_url: str, form: dict[str, str], timeout: int, session: requests.Session | None) -> TokenPair:
    url = f"{auth_url.rstrip('/')}/oauth/token"
    try:
        payload = request_json(
            session or requests.Session(),
            "POST",
            url,
            timeout=timeout,
            headers=FORM_HEADERS,
            data=form,
        )
    except RemoteError as e:
        raise AuthError(f"SpareBank1 token request failed: {e}") from e
    return TokenPair.from_dict(payload)


def refresh_access_token(config: SpareBank1Config, session: requests.Session | None = None) -> str:
    """
    Exchange the stored refresh token for a new access token.

    The rotated refresh token is written back to ``config.refresh_token_file``.

    Raises:
        AuthError: If the exchange fails or the new token cannot be stored
    """
    refresh_token = read_refresh_token(config.refresh_token_file, config.initial_refresh_token)

    tokens = _token_request(
        config.auth_url,
        {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "client_id": config.client_id,
            "client_secret": config.client_secret,
        },
        config.timeout,
        session,
    )
    save_refresh_token(config.refresh_token_file, tokens.refresh_token)
    logger.info("Obtained SpareBank1 access token")
    return tokens.access_token


def build_redirect_uri(port: int = DEFAULT_REDIRECT_PORT) -> str:
    return f"http://{REDIRECT_HOST}:{port}"


def build_authorize_url(
    client_id: str,
    fin_inst: str,
    state: str,
    redirect_uri: str,
    auth_url: str = DEFAULT_AUTH_URL,
) -> str:
    """Build the browser URL that starts the authorization-code flow."""
    query = urllib.parse.urlencode(
        {
            "client_id": client_id,
            "state": state,
            "redirect_uri": redirect_uri,
            "finInst": fin_inst,
            "response_type": "code",
        }
    )
    return f"{auth_url.rstrip('/')}/oauth/authorize?{query}"


def exchange_authorization_code(
    client_id: str,
    client_secret: str,
    code: str,
    state: str,
    redirect_uri: str,
    auth_url: str = DEFAULT_AUTH_URL,
    timeout: int = 30,
    session: requests.Session | None = None,
) -> TokenPair:
    """Exchange an authorization code for an access/refresh token pair."""
    return _token_request(
        auth_url,
        {
            "client_id": client_id,
            "client_secret": client_secret,
            "redirect_uri": redirect_uri,
            "grant_type": "authorization_code",
            "code": code,
            "state": state,
        },
        timeout,
        session,
    )


def parse_callback_query(path: str, expected_state: str) -> str:
    """
    Extract the authorization code from a callback request path.

    Raises:
        AuthError: If the state does not match or no code is present
    """
    params = urllib.parse.parse_qs(urllib.parse.urlparse(path).query)

    if "error" in params:
        raise AuthError(f"Authorization was denied: {params['error'][0]}")

    state = params.get("state", [None])[0]
    if state != expected_state:
        raise AuthError("Authorization callback state does not match the request")

    code = params.get("code", [None])[0]
    if not code:
        raise AuthError("Authorization callback did not include a code")
    return code


def _build_callback_handler(expected_state: str, result: dict[str, Any]) -> type[BaseHTTPRequestHandler]:
    class CallbackHandler(BaseHTTPRequestHandler):
        def _send_html(self, body: str, status: HTTPStatus) -> None:
            body_bytes = body.encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", "text/html; charset=utf-8")
            self.send_header("Content-Length", str(len(body_bytes)))
            self.end_headers()
            self.wfile.write(body_bytes)

        def do_GET(self) -> None:  # noqa: N802
            # Browsers also ask for /favicon.ico
            if "?" not in self.path:
                self.send_error(HTTPStatus.NOT_FOUND, "Not Found")
                return
            try:
                result["code"] = parse_callback_query(self.path, expected_state)
            except AuthError as e:
                result["error"] = e
                self._send_html(CALLBACK_ERROR_HTML, HTTPStatus.BAD_REQUEST)
                return
            self._send_html(CALLBACK_SUCCESS_HTML, HTTPStatus.OK)

        def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
            logger.debug(format % args)

    return CallbackHandler


def wait_for_authorization_code(
    expected_state: str,
    host: str = REDIRECT_HOST,
    port: int = DEFAULT_REDIRECT_PORT,
    timeout_seconds: int = 300,
) -> str:
    """
    Run a local listener until SpareBank1 redirects back with a code.

    Raises:
        AuthError: On timeout, state mismatch or denied authorization
    """
    result: dict[str, Any] = {}
    server = HTTPServer((host, port), _build_callback_handler(expected_state, result))
    server.timeout = 1
    deadline = time.monotonic() + timeout_seconds

    logger.info(f"Waiting for OAuth callback on http://{host}:{port}")
    try:
        while "code" not in result and "error" not in result:
            if time.monotonic() > deadline:
                raise AuthError(f"Timed out after {timeout_seconds}s waiting for SpareBank1 login")
            server.handle_request()
    finally:
        server.server_close()

    if "error" in result:
        raise result["error"]
    return result["code"]
