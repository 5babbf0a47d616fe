# opsm/render/text.py
from __future__ import annotations

from typing import Any, Dict, List


def render_plan_text(payload: Dict[str, Any]) -> str:
    """Plain-text plan: one line per backend, then the dry-run preview if any."""
    rows = [e for e in (payload.get("plan") or []) if isinstance(e, dict)]
    if not rows:
        return "(empty plan)"

    width = max(len(str(e.get("backend", ""))) for e in rows)
    lines: List[str] = []
    for e in rows:
        backend = str(e.get("backend", ""))
        pkgs = ", ".join(str(p) for p in (e.get("packages") or []))
        status = str(e.get("status") or "unknown")
        lines.append(f"{backend.ljust(width)}  {pkgs}  [{status}]")

    dry = [d for d in (payload.get("dry_run") or []) if isinstance(d, dict)]
    if dry:
        lines.append("")
        lines.append("dry run:")
        for d in dry:
            head = f"  $ {d.get('preview', '')}"
            if d.get("status"):
                head += f"  [{d['status']}]"
            lines.append(head)
            out = str(d.get("output") or "").strip()
            if out and d.get("status") != "skipped":
                lines.extend(f"    {ln}" for ln in out.splitlines())
    return "\n".join(lines)
