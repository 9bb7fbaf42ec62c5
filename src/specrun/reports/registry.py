"""Reporter registry: look reporters up by short name or import string."""

from __future__ import annotations

import importlib
import inspect
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, TypeVar, overload


if TYPE_CHECKING:
    from specrun.reports.base import Reporter


T = TypeVar("T")

_reporter_registry: dict[str, type[Any]] = {}
_builtin_registry: dict[str, type[Any]] = {}

_CALLBACKS = (
    "on_run_start",
    "on_file_start",
    "on_file_error",
    "on_suite_start",
    "on_test_start",
    "on_test_end",
    "on_suite_end",
    "on_file_end",
    "on_run_complete",
)


@overload
def reporter(cls: type[T], *, name: str | None = None) -> type[T]: ...


@overload
def reporter(cls: None = None, *, name: str | None = None) -> Callable[[type[T]], type[T]]: ...


def reporter(cls: type[T] | None = None, *, name: str | None = None) -> Any:
    """Register a reporter class, as ``@reporter`` or ``@reporter(name="dots")``.

    The registry name defaults to the class name.
    """

    def decorator(target: type[T]) -> type[T]:
        _reporter_registry[name or target.__name__] = target
        return target

    if cls is not None:
        return decorator(cls)
    return decorator


def register_builtin(name: str, cls: type[T]) -> type[T]:
    """Register a reporter that survives :func:`clear_reporter_registry`."""
    _reporter_registry[name] = cls
    _builtin_registry[name] = cls
    return cls


def get_reporter_registry() -> dict[str, type[Any]]:
    """Get the global reporter registry."""
    return _reporter_registry


def clear_reporter_registry() -> None:
    """Drop every user-registered reporter, keeping built-ins."""
    _reporter_registry.clear()
    _reporter_registry.update(_builtin_registry)


def _is_reporter_class(cls: Any) -> bool:
    return isinstance(cls, type) and all(callable(getattr(cls, callback, None)) for callback in _CALLBACKS)


def _import_reporter_class(import_path: str) -> type[Any]:
    """Import a reporter class from ``"package.module:Class"`` or ``"package.module.Class"``."""
    if ":" in import_path:
        module_path, class_name = import_path.split(":", 1)
    elif "." in import_path:
        module_path, class_name = import_path.rsplit(".", 1)
    else:
        msg = f"Invalid import path: {import_path}"
        raise ValueError(msg)

    try:
        module = importlib.import_module(module_path)
        cls = getattr(module, class_name)
    except (ImportError, AttributeError) as exc:
        msg = f"Cannot import reporter {import_path}: {exc}"
        raise ValueError(msg) from exc

    if not _is_reporter_class(cls):
        msg = f"{import_path} does not implement the Reporter callbacks"
        raise TypeError(msg)
    return cls


def resolve_reporter(name: str, **kwargs: Any) -> Reporter:
    """Instantiate a reporter by registry name or import string.

    Raises:
        ValueError: If the name is neither registered nor importable.
    """
    cls = _reporter_registry.get(name)
    if cls is None:
        if ":" not in name and "." not in name:
            available = ", ".join(sorted(_reporter_registry)) or "none"
            msg = f"Unknown reporter: {name}. Available: {available}"
            raise ValueError(msg)
        cls = _import_reporter_class(name)
    return cls(**kwargs)


def resolve_reporters(
    names: Sequence[str],
    options: Mapping[str, Mapping[str, Any]] | None = None,
    **shared: Any,
) -> list[Reporter]:
    """Instantiate several reporters; ``options`` maps names to constructor kwargs.

    ``shared`` kwargs are passed to every reporter whose constructor accepts
    them by name (for example ``verbosity``), per-reporter options win.
    """
    options = options or {}
    reporters = []
    for name in names:
        kwargs = {**_accepted(name, shared), **options.get(name, {})}
        reporters.append(resolve_reporter(name, **kwargs))
    return reporters


def _accepted(name: str, shared: Mapping[str, Any]) -> dict[str, Any]:
    cls = _reporter_registry.get(name)
    if cls is None or not shared:
        return {}
    parameters = inspect.signature(cls).parameters
    return {key: value for key, value in shared.items() if key in parameters}


__all__ = [
    "clear_reporter_registry",
    "get_reporter_registry",
    "register_builtin",
    "reporter",
    "resolve_reporter",
    "resolve_reporters",
]
