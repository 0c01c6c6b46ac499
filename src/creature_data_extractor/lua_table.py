"""Utilities to turn Luau configuration modules into luaparser table nodes."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from luaparser import ast, astnodes

from .luau import normalize_source

logger = logging.getLogger(__name__)


class LuaParseError(RuntimeError):
    """Raised when normalized source still does not parse."""


class ExtractionError(RuntimeError):
    """Raised when the table holding a module's data cannot be located."""


def parse_lua(text: str) -> astnodes.Chunk:
    try:
        return ast.parse(text)
    except Exception as exc:
        raise LuaParseError(f"Lua parse failed: {exc}") from exc


def _statements(chunk: astnodes.Chunk) -> List[astnodes.Node]:
    body = chunk.body
    if isinstance(body, astnodes.Block):
        return list(body.body)
    return list(body or [])


def _as_list(values) -> list:
    if values is None:
        return []
    if isinstance(values, list):
        return values
    return [values]


def _binding_for(statement: astnodes.Node, name: str) -> Optional[astnodes.Node]:
    if not isinstance(statement, (astnodes.LocalAssign, astnodes.Assign)):
        return None
    values = _as_list(statement.values)
    for idx, target in enumerate(_as_list(statement.targets)):
        if isinstance(target, astnodes.Name) and target.id == name:
            # A declaration without an initializer still shadows older bindings.
            return values[idx] if idx < len(values) else astnodes.Nil()
    return None


def resolve_exported_table(chunk: astnodes.Chunk) -> astnodes.Table:
    """Return the table node the module hands back through `return`.

    A returned identifier is resolved by walking backwards from the return
    statement to the nearest local declaration or assignment of that name.
    """

    statements = _statements(chunk)
    return_idx = next(
        (idx for idx, stmt in enumerate(statements) if isinstance(stmt, astnodes.Return)),
        None,
    )
    if return_idx is None:
        raise ExtractionError("module has no top-level return statement")

    values = _as_list(statements[return_idx].values)
    if not values:
        raise ExtractionError("module returns nothing")

    exported = values[0]
    if isinstance(exported, astnodes.Table):
        return exported
    if not isinstance(exported, astnodes.Name):
        raise ExtractionError(f"module returns a {type(exported).__name__}, expected a table")

    for stmt in reversed(statements[:return_idx]):
        init = _binding_for(stmt, exported.id)
        if init is None:
            continue
        if isinstance(init, astnodes.Table):
            return init
        raise ExtractionError(
            f"'{exported.id}' is bound to a {type(init).__name__}, expected a table"
        )
    raise ExtractionError(f"no binding found for returned name '{exported.id}'")


def _consume_long_bracket(text: str, idx: int) -> tuple[int, int] | None:
    """Return (level, body start) when a `[[` / `[==[` opener sits at `idx`."""
    pos = idx + 1
    eqs = 0
    while pos < len(text) and text[pos] == "=":
        eqs += 1
        pos += 1
    if pos < len(text) and text[pos] == "[":
        return eqs, pos + 1
    return None


def _skip_long_body(text: str, start: int, eqs: int) -> int:
    close_seq = "]" + "=" * eqs + "]"
    end = text.find(close_seq, start)
    if end == -1:
        return len(text)
    return end + len(close_seq)


def _consume_lua_block(text: str, start: int) -> tuple[str, int] | tuple[None, int]:
    """Return the full `{...}` block starting at `start` and the next position."""
    depth = 0
    idx = start
    while idx < len(text):
        ch = text[idx]
        if ch in ("'", '"'):
            idx += 1
            while idx < len(text) and text[idx] != ch:
                if text[idx] == "\\":
                    idx += 1
                elif text[idx] == "\n":
                    break
                idx += 1
            idx += 1
            continue
        if text.startswith("--", idx):
            long = _consume_long_bracket(text, idx + 2) if text.startswith("[", idx + 2) else None
            if long:
                idx = _skip_long_body(text, long[1], long[0])
            else:
                newline = text.find("\n", idx)
                idx = len(text) if newline == -1 else newline + 1
            continue
        if ch == "[":
            long = _consume_long_bracket(text, idx)
            if long:
                idx = _skip_long_body(text, long[1], long[0])
                continue

        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : idx + 1], idx + 1
        idx += 1
    return None, start


def find_table_literal(text: str, anchors: Iterable[str]) -> str:
    """Return the `{...}` literal assigned after the first anchor that matches.

    Each anchor is a regular expression ending with the opening brace of the
    table, e.g. ``r"WeatherConfig\\.Types\\s*=\\s*\\{"``.
    """

    tried = []
    for anchor in anchors:
        tried.append(anchor)
        for match in re.finditer(anchor, text):
            start = match.end() - 1
            if text[start] != "{":
                continue
            block, _ = _consume_lua_block(text, start)
            if block:
                return block
            logger.warning("Unbalanced table after anchor %r", anchor)
    raise ExtractionError(f"no table found for anchors {tried}")


def parse_table_literal(block: str) -> astnodes.Table:
    return resolve_exported_table(parse_lua(f"return {block}"))


@dataclass(frozen=True)
class LuaModuleSource:
    path: Path

    def load_text(self) -> str:
        path = Path(self.path)
        if not path.exists():
            raise FileNotFoundError(f"Source module not found: {path}")
        return normalize_source(path.read_text(encoding="utf-8"))

    def load_chunk(self) -> astnodes.Chunk:
        return parse_lua(self.load_text())

    def exported_table(self) -> astnodes.Table:
        return resolve_exported_table(self.load_chunk())

    def anchored_table(self, *anchors: str) -> astnodes.Table:
        return parse_table_literal(find_table_literal(self.load_text(), anchors))
