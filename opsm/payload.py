# opsm/payload.py
from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Mapping, Optional

from .host import AUTO_PREFERENCE, dry_run_commands, probe_backends, resolve_auto_backend, run_dry_run
from .model import DEFAULT_MODE, MODES, BackendStatus
from .plan_lang import interpret_tokens, tokenize_plan

SCHEMA_VERSION = 1


def normalize_mode(mode: Optional[str]) -> str:
    m = (mode or "").strip().lower()
    if m not in MODES:
        raise ValueError(f"Unknown mode {mode!r} (expected one of: {', '.join(MODES)})")
    return m


def _status_label(backend: str, statuses: Mapping[str, BackendStatus]) -> str:
    if backend == "auto":
        resolved = resolve_auto_backend(statuses)
        if resolved:
            return f"via {resolved}"
    st = statuses.get(backend)
    return st.status if st is not None else "unknown"


def build_payload(
    text: str,
    *,
    mode: str = DEFAULT_MODE,
    probe: bool = False,
    statuses: Optional[Mapping[str, BackendStatus]] = None,
    dry_run: bool = False,
    execute_dry_run: bool = False,
) -> Dict[str, Any]:
    """Parse ``text`` and assemble the document the UI renders.

    ``statuses`` may be supplied by the caller; with ``probe=True`` the
    backends present in the plan are probed on the host instead.
    """
    mode = normalize_mode(mode)
    tokens = tokenize_plan(text or "")
    plan = interpret_tokens(tokens)

    st: Dict[str, BackendStatus] = dict(statuses or {})
    if probe:
        probed = probe_backends(plan.keys())
        if "auto" in plan:
            # auto resolves against whichever concrete backends are usable.
            probed.update(probe_backends(b for b in AUTO_PREFERENCE if b not in probed))
        st.update(probed)

    entries: List[Dict[str, Any]] = []
    for backend, packages in plan.items():
        entries.append(
            {
                "backend": backend,
                "packages": list(packages),
                "status": _status_label(backend, st),
            }
        )

    dry: List[Dict[str, Any]] = []
    if dry_run or execute_dry_run:
        for step in dry_run_commands(plan, st):
            if execute_dry_run:
                dry.append(run_dry_run(step).to_dict())
            else:
                dry.append(step.to_dict())

    return {
        "schema_version": SCHEMA_VERSION,
        "meta": {
            "generated_at": dt.datetime.now(dt.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "mode": mode,
        },
        "input": text or "",
        "tokens": list(tokens),
        "plan": entries,
        "backends": {b: s.to_dict() for b, s in st.items()},
        "dry_run": dry,
    }


def plan_from_payload(payload: Dict[str, Any]) -> Dict[str, List[str]]:
    out: Dict[str, List[str]] = {}
    for e in payload.get("plan") or []:
        if isinstance(e, dict) and isinstance(e.get("backend"), str):
            out[e["backend"]] = [p for p in (e.get("packages") or []) if isinstance(p, str)]
    return out
