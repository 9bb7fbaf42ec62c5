from .context import (
    BUILD_CONTEXT,
    CURRENT_TOKEN,
    ExecutionToken,
    build_context_scope,
    token_scope,
)
from .attempt_hooks import (
    TestHookRegistry,
    get_test_hook_registry,
    on_test_failed,
    on_test_finished,
)

__all__ = [
    "BUILD_CONTEXT",
    "CURRENT_TOKEN",
    "ExecutionToken",
    "TestHookRegistry",
    "build_context_scope",
    "get_test_hook_registry",
    "on_test_failed",
    "on_test_finished",
    "token_scope",
]
