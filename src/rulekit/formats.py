"""Format evaluation for single and multi-format handlers.

A handler entry is normalized into an ordered list of (format name, handler)
pairs. Single handlers get the format name None and are always evaluated;
named formats are filtered by the selector found in the options:

- "any": pass on the first format that succeeds, in declaration order
- "all": every format must succeed, stopping at the first failure
- a name or list of names: only those formats, with "any" semantics
"""

from typing import Any, Iterable, Mapping

from rulekit.types import CheckResult, Handler, Pattern, Predicate, to_handler

ANY = "any"
ALL = "all"

FormatList = list[tuple[str | None, Handler]]


def normalize_entry(entry: Any) -> FormatList:
    """Normalize a registered handler entry into (format name, handler) pairs."""
    if isinstance(entry, Mapping):
        if not entry:
            raise ValueError("A multi-format handler needs at least one format")
        return [(str(name), to_handler(candidate)) for name, candidate in entry.items()]
    return [(None, to_handler(entry))]


def _is_pair(item: Any) -> bool:
    return (
        isinstance(item, tuple)
        and len(item) == 2
        and (item[0] is None or isinstance(item[0], str))
        and isinstance(item[1], (Pattern, Predicate))
    )


def as_format_list(formats: Any) -> FormatList:
    """Normalize what check_formats accepts into (format name, handler) pairs.

    A list may mix normalized pairs with bare handler entries; the entries
    are normalized in place.
    """
    if not isinstance(formats, (list, tuple)):
        return normalize_entry(formats)
    pairs: FormatList = []
    for item in formats:
        if _is_pair(item):
            pairs.append(item)
        else:
            pairs.extend(normalize_entry(item))
    return pairs


def selector_from(options: Mapping[str, Any]) -> str | list[str]:
    """Read the format selector from options ("check" wins over "format")."""
    selector = options.get("check") or options.get("format") or ANY
    if isinstance(selector, (list, tuple, set, frozenset)):
        return [str(s) for s in selector]
    return str(selector)


def run_handler(handler: Handler, value: Any, options: Mapping[str, Any]) -> CheckResult:
    """Dispatch on the handler variant."""
    if isinstance(handler, Pattern):
        return CheckResult(handler.matches(value))
    return handler(value, options)


def _selected(formats: FormatList, selector: str | list[str]) -> Iterable[tuple[str | None, Handler]]:
    if selector in (ANY, ALL):
        return formats
    wanted = [selector] if isinstance(selector, str) else selector
    return [(name, handler) for name, handler in formats if name is None or name in wanted]


def check_formats(
    value: Any,
    formats: Any,
    options: Mapping[str, Any] | None = None,
) -> CheckResult:
    """Check a value against a handler's formats.

    Args:
        value: The value to check
        formats: A handler entry, or a list of handler entries and/or
            normalized (name, handler) pairs
        options: Options passed to predicates; holds the "check"/"format" selector

    Returns:
        CheckResult whose params merge those reported by every evaluated format
    """
    options = dict(options or {})
    formats = as_format_list(formats)

    selector = selector_from(options)
    require_all = selector == ALL
    params: dict[str, Any] = {}
    evaluated = False

    for _name, handler in _selected(formats, selector):
        evaluated = True
        result = run_handler(handler, value, options)
        params.update(result.params)
        if result.valid and not require_all:
            return CheckResult(True, params)
        if not result.valid and require_all:
            return CheckResult(False, params)

    return CheckResult(require_all and evaluated, params)
