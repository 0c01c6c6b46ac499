"""Strip Luau type syntax so the remaining source parses as plain Lua."""

from __future__ import annotations

import re

_TYPE_ALIAS_RE = re.compile(r"^[ \t]*(?:export[ \t]+)?type[ \t]+\w+.*=.+$", re.MULTILINE)
# Strings and comments, matched first so rewrites never reach inside them.
_LITERAL = (
    r"(?P<literal>"
    r"--\[(?P<ceq>=*)\[.*?\](?P=ceq)\]"
    r"|\[(?P<leq>=*)\[.*?\](?P=leq)\]"
    r"|--[^\n]*"
    r"|\"(?:\\.|[^\"\\\n])*\""
    r"|'(?:\\.|[^'\\\n])*'"
    r")"
)
_FUNCTION_HEADER_RE = re.compile(
    _LITERAL
    + r"|\bfunction(?P<name>[ \t]+[\w.:]+)?[ \t]*\((?P<params>[^)]*)\)(?:[ \t]*:[ \t]*[\w?.]+)?",
    re.DOTALL,
)
_LOCAL_ANNOTATION_RE = re.compile(r"local\s+(\w+)\s*:\s*[\w.?]+\s*=")
_LOCAL_SHAPE_ANNOTATION_RE = re.compile(r"local\s+(\w+)\s*:\s*\{[^}]*\}\s*=")
_PRAGMA_RE = re.compile(r"--!(?:strict|nonstrict|nocheck|native|optimize[ \t]*\d*)")
_ASSERTION_RE = re.compile(_LITERAL + r"|::\s*[\w.]+", re.DOTALL)


def _strip_parameter_types(params: str) -> str:
    names = []
    for param in params.split(","):
        name = param.split(":", 1)[0].strip()
        if name:
            names.append(name)
    return ", ".join(names)


def _rewrite_function_header(match: re.Match) -> str:
    if match.group("literal") is not None:
        return match.group("literal")
    name = match.group("name") or ""
    return f"function{name}({_strip_parameter_types(match.group('params'))})"


def _keep_literal(match: re.Match) -> str:
    return match.group("literal") or ""


def normalize_source(text: str) -> str:
    """Return `text` with Luau-only syntax removed.

    The rewrites are textual and run in a fixed order: type aliases,
    function signatures, local annotations, pragmas, then inline `::`
    assertions. Signatures and assertions inside string literals and
    comments are left untouched. Annotations that span several lines are
    left alone and surface later as a parse failure.
    """

    content = _TYPE_ALIAS_RE.sub("", text)
    content = _FUNCTION_HEADER_RE.sub(_rewrite_function_header, content)
    content = _LOCAL_ANNOTATION_RE.sub(r"local \1 =", content)
    content = _LOCAL_SHAPE_ANNOTATION_RE.sub(r"local \1 =", content)
    content = _PRAGMA_RE.sub("", content)
    content = _ASSERTION_RE.sub(_keep_literal, content)
    return content
