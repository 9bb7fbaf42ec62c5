from __future__ import annotations

import itertools
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from specrun.testing.builder import SuiteBuilder


_token_ids = itertools.count(1)


@dataclass(frozen=True, slots=True)
class ExecutionToken:
    """Opaque identity of one attempt of one test.

    Attributes
    ----------
    full_name
        Suite-path-qualified name of the test being executed.
    attempt
        1-based attempt number; every retry gets a fresh token.
    serial
        Process-unique sequence number; tokens compare by identity of this value.
    """

    full_name: str
    attempt: int = 1
    serial: int = field(default_factory=lambda: next(_token_ids))


BUILD_CONTEXT: ContextVar[SuiteBuilder | None] = ContextVar("build_context", default=None)
CURRENT_TOKEN: ContextVar[ExecutionToken | None] = ContextVar("current_token", default=None)


@contextmanager
def build_context_scope(builder: SuiteBuilder) -> Iterator[None]:
    token = BUILD_CONTEXT.set(builder)
    try:
        yield
    finally:
        BUILD_CONTEXT.reset(token)


@contextmanager
def token_scope(execution: ExecutionToken) -> Iterator[None]:
    token = CURRENT_TOKEN.set(execution)
    try:
        yield
    finally:
        CURRENT_TOKEN.reset(token)
