"""Minimal prompt template language.

Syntax
------
``$name``
    Replaced by the scalar bound to ``name`` in the current scope. Names
    that are unbound (or bound to a sequence) are left in the output as
    written.
``{foreach name}`` ... ``{/foreach name}``
    Repeats the enclosed body once per element of the sequence bound to
    ``name``. A mapping element exposes its keys as scalars inside the
    body; any other element is bound to ``name`` itself. Each rendered
    iteration is stripped and iterations are joined with ``"\\n"``. An empty
    or unbound sequence renders as ``""``.

Loops nest at most :data:`MAX_LOOP_DEPTH` levels. Substituted values are
inserted verbatim and never scanned again.
"""
from __future__ import annotations

import re
from collections import ChainMap
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from voice_journal.exceptions import TemplateSyntaxError

__all__ = [
    "Literal",
    "Scalar",
    "Loop",
    "PromptTemplate",
    "parse",
    "render",
    "expand",
]

MAX_LOOP_DEPTH = 2

_TOKEN_RE = re.compile(
    r"\{foreach (?P<open>\w+)\}"
    r"|\{/foreach (?P<close>\w+)\}"
    r"|\$(?P<scalar>[A-Za-z_][A-Za-z0-9_]*)"
)


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Scalar:
    name: str


@dataclass(frozen=True)
class Loop:
    name: str
    body: Tuple["Node", ...]


Node = Union[Literal, Scalar, Loop]


def parse(source: str) -> Tuple[Node, ...]:
    """Parse *source* into a tuple of nodes.

    Raises
    ------
    TemplateSyntaxError
        On a stray or mismatched ``{/foreach}``, an unclosed ``{foreach}``
        or loops nested deeper than :data:`MAX_LOOP_DEPTH`.
    """

    # Each frame is (loop name, nodes collected so far); the root frame has no name.
    stack: List[Tuple[Optional[str], List[Node]]] = [(None, [])]
    pos = 0

    for match in _TOKEN_RE.finditer(source):
        if match.start() > pos:
            stack[-1][1].append(Literal(source[pos : match.start()]))
        pos = match.end()

        if match.group("scalar") is not None:
            stack[-1][1].append(Scalar(match.group("scalar")))
        elif match.group("open") is not None:
            name = match.group("open")
            if len(stack) > MAX_LOOP_DEPTH:
                raise TemplateSyntaxError(
                    f"{{foreach {name}}} nests deeper than {MAX_LOOP_DEPTH} levels"
                )
            stack.append((name, []))
        else:
            name = match.group("close")
            if len(stack) == 1:
                raise TemplateSyntaxError(f"{{/foreach {name}}} without matching open")
            open_name, body = stack.pop()
            if open_name != name:
                raise TemplateSyntaxError(
                    f"{{/foreach {name}}} closes {{foreach {open_name}}}"
                )
            stack[-1][1].append(Loop(name, tuple(body)))

    if len(stack) > 1:
        raise TemplateSyntaxError(f"{{foreach {stack[-1][0]}}} is never closed")
    if pos < len(source):
        stack[0][1].append(Literal(source[pos:]))
    return tuple(stack[0][1])


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _render_scalar(node: Scalar, scope: Mapping[str, Any]) -> str:
    value = scope.get(node.name)
    if value is None or _is_sequence(value) or isinstance(value, Mapping):
        return f"${node.name}"
    return str(value)


def _render_loop(node: Loop, scope: Mapping[str, Any]) -> str:
    items = scope.get(node.name)
    if not _is_sequence(items):
        return ""

    rendered: List[str] = []
    for item in items:
        if isinstance(item, Mapping):
            item_scope = ChainMap(dict(item), scope)
        else:
            item_scope = ChainMap({node.name: item}, scope)
        rendered.append(render(node.body, item_scope).strip())
    return "\n".join(rendered)


def render(nodes: Sequence[Node], scope: Mapping[str, Any]) -> str:
    """Render parsed *nodes* against *scope*."""

    out: List[str] = []
    for node in nodes:
        if isinstance(node, Literal):
            out.append(node.text)
        elif isinstance(node, Scalar):
            out.append(_render_scalar(node, scope))
        else:
            out.append(_render_loop(node, scope))
    return "".join(out)


class PromptTemplate:
    """A template parsed once and expanded many times."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.nodes = parse(source)

    def expand(self, scope: Mapping[str, Any]) -> str:
        return render(self.nodes, scope)


def expand(source: str, scope: Mapping[str, Any]) -> str:
    """Parse and render *source* in one go."""
    return render(parse(source), scope)
