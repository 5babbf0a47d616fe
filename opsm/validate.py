"""Payload validation helpers (library-facing)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from opsm.model import BACKENDS, MODES
from opsm.payload import SCHEMA_VERSION


class PayloadValidationError(ValueError):
    """Raised when a payload fails validation."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _get_generated_at(payload: Dict[str, Any]) -> Optional[str]:
    meta = payload.get("meta")
    if isinstance(meta, dict):
        ga = meta.get("generated_at")
        if isinstance(ga, str) and ga.strip():
            return ga.strip()
    return None


def validate_payload(payload: Any) -> List[str]:
    """Return a list of human-readable problems (empty when the payload is valid)."""
    if not isinstance(payload, dict):
        return [f"payload must be dict, got {type(payload).__name__}"]

    errs: List[str] = []
    label = f"v{SCHEMA_VERSION}"

    _require(payload.get("schema_version") == SCHEMA_VERSION, f"{label}: schema_version must be {SCHEMA_VERSION}", errs)
    _require(bool(_get_generated_at(payload)), f"{label}: meta.generated_at must be non-empty string", errs)

    meta = payload.get("meta")
    if isinstance(meta, dict):
        _require(meta.get("mode") in MODES, f"{label}: meta.mode must be one of {', '.join(MODES)}", errs)
    else:
        errs.append(f"{label}: meta must be dict")

    _require(isinstance(payload.get("input"), str), f"{label}: input must be string", errs)

    tokens = payload.get("tokens")
    _require(isinstance(tokens, list), f"{label}: tokens must be list", errs)
    if isinstance(tokens, list):
        for i, t in enumerate(tokens):
            _require(isinstance(t, str) and bool(t), f"{label}: tokens[{i}] must be non-empty string", errs)

    plan = payload.get("plan")
    _require(isinstance(plan, list), f"{label}: plan must be list", errs)
    if isinstance(plan, list):
        seen = set()
        for i, e in enumerate(plan):
            if not isinstance(e, dict):
                errs.append(f"{label}: plan[{i}] must be dict")
                continue
            b = e.get("backend")
            _require(b in BACKENDS, f"{label}: plan[{i}].backend must be a known backend", errs)
            _require(b not in seen, f"{label}: plan[{i}].backend {b!r} appears more than once", errs)
            seen.add(b)
            pkgs = e.get("packages")
            _require(
                isinstance(pkgs, list) and bool(pkgs) and all(isinstance(p, str) and p for p in pkgs),
                f"{label}: plan[{i}].packages must be a non-empty list of strings",
                errs,
            )
            _require(isinstance(e.get("status"), str), f"{label}: plan[{i}].status must be string", errs)

    _require(isinstance(payload.get("backends"), dict), f"{label}: backends must be dict", errs)
    _require(isinstance(payload.get("dry_run"), list), f"{label}: dry_run must be list", errs)

    return errs


def assert_valid_payload(payload: Any) -> None:
    errs = validate_payload(payload)
    if errs:
        raise PayloadValidationError("; ".join(errs[:10]))
