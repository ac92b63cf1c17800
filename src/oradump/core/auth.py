"""Connection helpers for Oracle.

This module centralizes opening an ``oracledb`` connection: credentials are
taken from explicit arguments first and from ``ORADUMP_*`` environment
variables second, and driver errors are turned into a single error type
with a user-friendly message.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

import oracledb

USER_ENV = "ORADUMP_USER"
PASSWORD_ENV = "ORADUMP_PASSWORD"
DSN_ENV = "ORADUMP_DSN"


class OracleConnectError(RuntimeError):
    """Raised when an Oracle connection cannot be opened."""


@dataclass(frozen=True)
class Credentials:
    """Resolved connection settings."""

    user: str
    password: str
    dsn: str


def _sanitize_dsn(dsn: str) -> str:
    """
    Normalize an Easy Connect string.

    - Removes a leading ``//``
    - Removes surrounding whitespace and trailing slashes
    """
    dsn = dsn.strip()
    if dsn.startswith("//"):
        dsn = dsn[2:]
    return dsn.rstrip("/")


def resolve_credentials(
    user: str | None = None,
    password: str | None = None,
    dsn: str | None = None,
) -> Credentials:
    """Fill missing settings from the environment; fail if any is still missing."""
    user = user or os.getenv(USER_ENV)
    password = password or os.getenv(PASSWORD_ENV)
    dsn = dsn or os.getenv(DSN_ENV)
    missing = [
        env
        for env, value in ((USER_ENV, user), (PASSWORD_ENV, password), (DSN_ENV, dsn))
        if not value
    ]
    if missing:
        raise OracleConnectError(
            "Missing Oracle connection settings. Pass --user/--password/--dsn "
            f"or set {', '.join(missing)}."
        )
    return Credentials(user=user, password=password, dsn=_sanitize_dsn(dsn))


def _format_connect_error(message: str, dsn: str) -> str:
    """Return a user-friendly connect error message."""
    if "ORA-01017" in message:
        return f"Oracle rejected the username/password for {dsn}."
    if "DPY-6005" in message or "ORA-12541" in message:
        return f"Could not reach an Oracle listener at {dsn}."
    return f"Oracle connection to {dsn} failed: {message}"


def get_connection(credentials: Credentials) -> oracledb.Connection:
    """Open a thin-mode ``oracledb`` connection."""
    try:
        return oracledb.connect(
            user=credentials.user,
            password=credentials.password,
            dsn=credentials.dsn,
        )
    except oracledb.Error as exc:
        raise OracleConnectError(_format_connect_error(str(exc), credentials.dsn)) from exc
