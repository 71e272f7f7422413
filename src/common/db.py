"""
Database connection utilities.
A service opens its pooled client once at startup and waits for the database to come up.
Queries issued after startup are never retried; only connection establishment is.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError

LOGGER = logging.getLogger("db")

DEFAULT_CONNECT_ATTEMPTS = 10
DEFAULT_CONNECT_DELAY_SECONDS = 2.0


class DatabaseUnavailableError(RuntimeError):
    """Raised when the database stays unreachable after every connection attempt."""

    def __init__(self, message: str, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


class Pingable(Protocol):
    def ping(self) -> None: ...


def connect_with_retry(
    client: Pingable,
    *,
    max_attempts: int = DEFAULT_CONNECT_ATTEMPTS,
    delay_seconds: float = DEFAULT_CONNECT_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> Pingable:
    """Ping `client` until it answers, sleeping `delay_seconds` between failed attempts."""

    if max_attempts <= 0:
        raise ValueError("max_attempts must be greater than 0.")

    attempts = 0
    last_error: str | None = None
    while attempts < max_attempts:
        attempts += 1
        try:
            client.ping()
            LOGGER.info("database reachable attempt=%d/%d", attempts, max_attempts)
            return client
        except SQLAlchemyError as exc:
            last_error = str(exc).splitlines()[0] if str(exc) else exc.__class__.__name__
            LOGGER.warning(
                "unable to connect to database attempt=%d/%d error=%s",
                attempts,
                max_attempts,
                last_error,
            )
            if attempts < max_attempts:
                sleep(delay_seconds)

    raise DatabaseUnavailableError(
        f"Unable to connect to database after {attempts} attempts: {last_error}",
        attempts,
    )
