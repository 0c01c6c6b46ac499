"""Fold luaparser expression nodes into plain Python values.

Tables become ``list`` when their keys are exactly ``1..N`` and ``dict``
otherwise. Expressions that cannot be folded statically (arithmetic, bare
identifiers, arbitrary calls) become ``None`` and are logged, so a field
that reads as missing downstream can be traced back to its source node.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from luaparser import astnodes

logger = logging.getLogger(__name__)

LuaValue = Union[None, bool, int, float, str, List[Any], Dict[Any, Any]]


def _unsupported(node: astnodes.Node, reason: str = "") -> None:
    detail = f" ({reason})" if reason else ""
    logger.warning("Cannot fold %s expression%s; using nil", type(node).__name__, detail)
    return None


def _string_value(node: astnodes.String) -> str:
    value = node.s
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _normalize_key(key: Any) -> Any:
    if isinstance(key, float) and key.is_integer():
        return int(key)
    return key


def _is_positional(field: astnodes.Field) -> bool:
    if field.key is None:
        return True
    # luaparser numbers implicit array entries itself; only bracketed keys are explicit.
    return isinstance(field.key, astnodes.Number) and not getattr(field, "between_brackets", False)


def _field_key(field: astnodes.Field) -> Any:
    if isinstance(field.key, astnodes.Name) and not getattr(field, "between_brackets", False):
        return field.key.id
    return _normalize_key(reify(field.key))


def reify_table(node: astnodes.Table) -> LuaValue:
    entries: Dict[Any, LuaValue] = {}
    next_index = 1
    for field in node.fields:
        if _is_positional(field):
            key = next_index
            next_index += 1
        else:
            key = _field_key(field)
            if key is None:
                logger.warning("Skipping table field with a nil key")
                continue
        entries[key] = reify(field.value)

    keys = list(entries)
    if all(isinstance(key, int) and not isinstance(key, bool) for key in keys) and set(
        keys
    ) == set(range(1, len(keys) + 1)):
        return [entries[idx] for idx in range(1, len(keys) + 1)]
    return entries


def member_name(node: astnodes.Index) -> Optional[str]:
    """Return `b` for a dotted `a.b` (or `a.x.b`) expression."""
    if node.notation != astnodes.IndexNotation.DOT or not isinstance(node.idx, astnodes.Name):
        return None
    base = node.value
    while isinstance(base, astnodes.Index) and base.notation == astnodes.IndexNotation.DOT:
        base = base.value
    if not isinstance(base, astnodes.Name):
        return None
    return node.idx.id


def callee_name(node: astnodes.Call) -> Optional[str]:
    func = node.func
    if isinstance(func, astnodes.Name):
        return func.id
    if isinstance(func, astnodes.Index):
        return member_name(func)
    return None


def _is_color3_new(node: astnodes.Call) -> bool:
    func = node.func
    return (
        isinstance(func, astnodes.Index)
        and member_name(func) == "new"
        and isinstance(func.value, astnodes.Name)
        and func.value.id == "Color3"
    )


def _fold_call(node: astnodes.Call) -> LuaValue:
    if _is_color3_new(node):
        args = [value for value in (reify(arg) for arg in node.args) if value is not None]
        if len(args) >= 3:
            return {"r": args[0], "g": args[1], "b": args[2]}
        return _unsupported(node, "Color3.new with fewer than three components")
    return _unsupported(node, f"call to {callee_name(node) or '<expression>'}")


def _fold_negation(node: astnodes.UMinusOp) -> LuaValue:
    operand = reify(node.operand)
    if _is_number(operand):
        return -operand
    return _unsupported(node, "negated operand is not a number")


def reify(node: Optional[astnodes.Node]) -> LuaValue:
    if node is None:
        return None
    if isinstance(node, astnodes.String):
        return _string_value(node)
    if isinstance(node, astnodes.Number):
        return node.n
    if isinstance(node, astnodes.TrueExpr):
        return True
    if isinstance(node, astnodes.FalseExpr):
        return False
    if isinstance(node, astnodes.Nil):
        return None
    if isinstance(node, astnodes.Table):
        return reify_table(node)
    if isinstance(node, astnodes.UMinusOp):
        return _fold_negation(node)
    if isinstance(node, astnodes.Index):
        name = member_name(node)
        if name is None:
            return _unsupported(node, "only dotted constants are folded")
        return name
    if isinstance(node, astnodes.Call):
        return _fold_call(node)
    return _unsupported(node)


def reify_args(node: astnodes.Call, width: int = 0) -> List[LuaValue]:
    """Reify call arguments positionally, padding with ``None`` up to `width`."""
    values = [reify(arg) for arg in node.args]
    if len(values) < width:
        values.extend([None] * (width - len(values)))
    return values


def iter_keyed_fields(node: astnodes.Table, label: str) -> Iterator[Tuple[str, astnodes.Node]]:
    """Yield ``(key, value node)`` for each keyed field of a table constructor.

    Positional fields and keys that do not fold are skipped with a warning.
    """

    for position, field in enumerate(node.fields, start=1):
        if _is_positional(field):
            logger.warning("Skipping %s entry #%d: entry has no key", label, position)
            continue
        key = _field_key(field)
        if key is None:
            logger.warning("Skipping %s entry #%d: key does not fold to a value", label, position)
            continue
        yield (key if isinstance(key, str) else str(key)), field.value


def as_map(value: LuaValue) -> Optional[Dict[Any, Any]]:
    """View a reified table as a mapping; lists are keyed from 1."""
    if isinstance(value, dict):
        return value
    if isinstance(value, list):
        return {idx: item for idx, item in enumerate(value, start=1)}
    return None
