"""Normalize raised import failures into ``Diagnostics`` records.

Failures come from different alphaTab versions and bridges, so the same data
shows up under different names: camelCase or snake_case collections, positions
as ``start.col`` or ``start.column`` or flat ``line``/``column`` fields on the
item itself. Each lookup below is an ordered list of candidate paths; the
first non-null value wins.
"""

from collections.abc import Mapping
from typing import Any

from common.logger import get_logger

from .models import DiagnosticItem, Diagnostics, Position

logger = get_logger(__name__)

# (category, candidate field names on the failure object)
CATEGORY_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("lexer", ("lexerDiagnostics", "lexer_diagnostics")),
    ("parser", ("parserDiagnostics", "parser_diagnostics")),
    ("semantic", ("semanticDiagnostics", "semantic_diagnostics")),
]

# Candidate paths for each start field; nested position object before flat item fields
START_RULES: dict[str, tuple[tuple[str, ...], ...]] = {
    "line": (("start", "line"), ("line",)),
    "column": (("start", "col"), ("start", "column"), ("column",), ("col",)),
    "offset": (("start", "offset"), ("offset",)),
}

END_RULES: dict[str, tuple[tuple[str, ...], ...]] = {
    "line": (("end", "line"),),
    "column": (("end", "col"), ("end", "column")),
    "offset": (("end", "offset"),),
}


def _field(obj: Any, name: str) -> Any:
    """Read ``name`` from a mapping key or an object attribute."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    value = getattr(obj, name, None)
    # Bound methods (e.g. dict.items on odd wrappers) are not data
    return None if callable(value) else value


def _path(obj: Any, path: tuple[str, ...]) -> Any:
    for name in path:
        obj = _field(obj, name)
        if obj is None:
            return None
    return obj


def _first(obj: Any, paths: tuple[tuple[str, ...], ...]) -> Any:
    for path in paths:
        value = _path(obj, path)
        if value is not None:
            return value
    return None


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _resolve_position(item: Any, rules: dict[str, tuple[tuple[str, ...], ...]]) -> Position:
    return Position(**{name: _as_int(_first(item, paths)) for name, paths in rules.items()})


def map_item(item: Any) -> DiagnosticItem:
    """Map one raw diagnostic item into the canonical shape.

    Example:
        >>> map_item({"code": 209, "start": {"line": 3, "col": 5}}).start
        Position(line=3, column=5, offset=None)
    """
    message = _field(item, "message")
    has_end = _field(item, "end") is not None
    return DiagnosticItem(
        code=_as_int(_field(item, "code")),
        message=str(message) if message is not None else None,
        severity=_as_int(_field(item, "severity")),
        start=_resolve_position(item, START_RULES),
        end=_resolve_position(item, END_RULES) if has_end else None,
    )


def _category_items(failure: Any, names: tuple[str, ...]) -> tuple[DiagnosticItem, ...]:
    for name in names:
        collection = _field(failure, name)
        if collection is None:
            continue
        items = collection if isinstance(collection, (list, tuple)) else _field(collection, "items")
        if isinstance(items, (list, tuple)):
            return tuple(map_item(item) for item in items)
    return ()


def _failure_type(failure: Any) -> Any:
    value = _field(failure, "type")
    if value is None and isinstance(failure, BaseException):
        return type(failure).__name__
    return value


def extract_diagnostics(failure: Any) -> Diagnostics:
    """Convert any raised failure into a Diagnostics record.

    Never raises: a category that cannot be mapped is left empty and the
    other categories are kept.

    Args:
        failure: Exception or mapping raised by the re-import step

    Returns:
        Normalized diagnostics
    """
    try:
        message = _field(failure, "message")
        message = str(message) if message is not None else str(failure)
    except Exception:
        message = f"Unprintable {type(failure).__name__}"

    try:
        failure_type = _failure_type(failure)
    except Exception as e:
        logger.warning(f"Could not read failure type ({type(e).__name__}: {e})")
        failure_type = None

    # A broken category only empties itself
    categories: dict[str, tuple[DiagnosticItem, ...]] = {}
    for category, names in CATEGORY_RULES:
        try:
            categories[category] = _category_items(failure, names)
        except Exception as e:
            logger.warning(f"Could not map {category} diagnostics ({type(e).__name__}: {e})")
            categories[category] = ()

    return Diagnostics(
        message=message,
        type=failure_type,
        lexer_errors=categories["lexer"],
        parser_errors=categories["parser"],
        semantic_errors=categories["semantic"],
    )
