"""Case expansion for ``each`` and ``for_`` declarations."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from specrun.errors import UsageError


_PLACEHOLDER = re.compile(r"%[sdio%]")
_KEY_TOKEN = re.compile(r"\$([A-Za-z_]\w*)")

NameTemplate = str | Callable[..., Any]


@dataclass(frozen=True)
class Expansion:
    """One generated declaration: its rendered name and the body arguments."""

    name: str
    args: tuple[Any, ...]


def _is_positional(case: Any) -> bool:
    return isinstance(case, (list, tuple))


def _substitute_keys(template: str, case: Mapping[str, Any]) -> str:
    def replace(match: re.Match[str]) -> str:
        key = match.group(1)
        return str(case[key]) if key in case else match.group(0)

    return _KEY_TOKEN.sub(replace, template)


def render_each_name(template: NameTemplate, case: Any) -> str:
    """Render a name for an ``each`` case.

    Positional cases feed placeholders left to right: every placeholder match,
    ``%%`` included, consumes the next element of a copy of the case. Mapping
    cases substitute ``$key`` tokens; anything else replaces every placeholder
    with the whole value.
    """
    if callable(template):
        args = tuple(case) if _is_positional(case) else (case,)
        return str(template(*args))

    if _is_positional(case):
        remaining = list(case)

        def consume(_match: re.Match[str]) -> str:
            return str(remaining.pop(0)) if remaining else str(None)

        return _PLACEHOLDER.sub(consume, template)

    if isinstance(case, Mapping):
        template = _substitute_keys(template, case)
    return _PLACEHOLDER.sub(lambda _match: str(case), template)


def render_for_name(template: NameTemplate, case: Any) -> str:
    """Render a name for a ``for_`` case; the case is never spread."""
    if callable(template):
        return str(template(case))
    if isinstance(case, Mapping):
        template = _substitute_keys(template, case)
    return _PLACEHOLDER.sub(lambda _match: str(case), template)


def _fallback(template: NameTemplate, index: int) -> str:
    label = template if isinstance(template, str) else getattr(template, "__name__", "case")
    return f"{label} [{index}]"


def expand_each(cases: Sequence[Any] | Mapping[Any, Any], template: NameTemplate) -> list[Expansion]:
    """Expand ``each`` cases into one declaration per case.

    Sequence-valued cases are spread as positional body arguments; every other
    case is passed as a single argument. A mapping of cases declares one entry
    per key, with the first ``%s`` replaced by the key.
    """
    if isinstance(cases, Mapping):
        expansions = []
        for key, value in cases.items():
            if callable(template):
                name = str(template(key, value))
            else:
                name = template.replace("%s", str(key), 1)
            expansions.append(Expansion(name=name, args=(value,)))
        return expansions

    if not isinstance(cases, (list, tuple)):
        msg = f"each expects a list or mapping of cases, got {type(cases).__name__}"
        raise UsageError(msg)

    expansions = []
    for index, case in enumerate(cases):
        name = render_each_name(template, case) or _fallback(template, index)
        args = tuple(case) if _is_positional(case) else (case,)
        expansions.append(Expansion(name=name, args=args))
    return expansions


def expand_for(cases: Sequence[Any], template: NameTemplate) -> list[Expansion]:
    """Expand ``for_`` cases; each case is passed whole as the only argument."""
    if not isinstance(cases, (list, tuple)):
        msg = "for_ expects a list of cases"
        raise UsageError(msg)

    return [
        Expansion(name=render_for_name(template, case) or _fallback(template, index), args=(case,))
        for index, case in enumerate(cases)
    ]


__all__ = ["Expansion", "NameTemplate", "expand_each", "expand_for", "render_each_name", "render_for_name"]
