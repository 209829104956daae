#!/usr/bin/env python3
"""
Error Taxonomy

Every failure the sync tool raises derives from SyncError. Library code never
recovers from these; the CLI decides how to present them.
"""


class SyncError(Exception):
    """Base class for all sync failures."""


class ConfigError(SyncError):
    """Missing or invalid configuration (env file, account mapping)."""


class AuthError(SyncError):
    """Token acquisition or refresh failed."""


class RemoteError(SyncError):
    """
    Non-success or unparsable response from the bank or YNAB API.

    The HTTP status and response body are preserved for diagnostics.
    """

    MAX_BODY_IN_MESSAGE = 500

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        url: str | None = None,
    ):
        self.status_code = status_code
        self.body = body
        self.url = url

        details = []
        if status_code is not None:
            details.append(f"status={status_code}")
        if url:
            details.append(f"url={url}")
        if body:
            snippet = body if len(body) <= self.MAX_BODY_IN_MESSAGE else body[: self.MAX_BODY_IN_MESSAGE] + "..."
            details.append(f"body={snippet}")

        full_message = f"{message} ({', '.join(details)})" if details else message
        super().__init__(full_message)


class UnmappedAccountError(SyncError):
    """A fetched transaction belongs to a bank account with no YNAB mapping."""

    def __init__(self, account_key: str):
        self.account_key = account_key
        super().__init__(f"No YNAB account mapped for bank account key: {account_key}")
