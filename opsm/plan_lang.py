# OPSM_PLAN_LANG_V1
from __future__ import annotations

from functools import reduce
from typing import Iterable, List, Optional, Tuple

from .model import BACKENDS, DEFAULT_BACKEND, Plan, Token

_BACKEND_SET = frozenset(BACKENDS)

# (cursor, plan) accumulator threaded through the fold.
_State = Tuple[str, Plan]


def normalize_backend(name: Optional[str]) -> str:
    """Map a user-supplied backend name to a known tag; anything else is "auto"."""
    key = (name or "").strip().lower()
    return key if key in _BACKEND_SET else DEFAULT_BACKEND


def is_bracket_token(token: Token) -> bool:
    return len(token) >= 2 and token.startswith("[") and token.endswith("]")


def tokenize_plan(text: str) -> List[Token]:
    """Split a request line into plain tokens and ``[...]`` groups.

    Whitespace separates tokens only outside brackets. An unterminated
    bracket is still emitted as a group at end of input.
    """
    tokens: List[Token] = []
    buf: List[str] = []
    in_bracket = False

    def flush(bracketed: bool) -> None:
        chunk = "".join(buf).strip()
        buf.clear()
        if chunk:
            tokens.append(f"[{chunk}]" if bracketed else chunk)

    for ch in text or "":
        if ch == "[" and not in_bracket:
            flush(False)
            in_bracket = True
            continue
        if ch == "]" and in_bracket:
            flush(True)
            in_bracket = False
            continue
        if not in_bracket and ch.isspace():
            flush(False)
            continue
        buf.append(ch)

    flush(in_bracket)
    return tokens


def _append(plan: Plan, backend: str, pkg: str) -> None:
    # Keys are created lazily so the plan never holds an empty list.
    plan.setdefault(backend, []).append(pkg)


def _step(state: _State, token: Token) -> _State:
    cursor, plan = state

    if is_bracket_token(token):
        inner = token[1:-1].strip()
        name, sep, rest = inner.partition(":")
        if not sep:
            return normalize_backend(inner), plan
        backend = normalize_backend(name)
        for pkg in rest.split():
            _append(plan, backend, pkg)
        return backend, plan

    name, sep, rest = token.partition(":")
    if sep:
        backend = normalize_backend(name)
        pkg = rest.strip()
        if pkg:
            _append(plan, backend, pkg)
        return backend, plan

    _append(plan, cursor or DEFAULT_BACKEND, token)
    return cursor, plan


def interpret_tokens(tokens: Iterable[Token]) -> Plan:
    """Fold tokens into a backend -> packages mapping.

    Never raises: unknown backend names land in "auto" and anything that is
    not a backend prefix is kept as a package string.
    """
    _cursor, plan = reduce(_step, (t for t in tokens if t), (DEFAULT_BACKEND, {}))
    return plan


def parse_plan(text: str) -> Plan:
    return interpret_tokens(tokenize_plan(text))


__all__ = [
    "normalize_backend",
    "is_bracket_token",
    "tokenize_plan",
    "interpret_tokens",
    "parse_plan",
]
