from __future__ import annotations

import argparse
import json
import os
import sys
import webbrowser
from pathlib import Path

from .model import DEFAULT_MODE, MODES
from .payload import build_payload, normalize_mode
from .plan_lang import tokenize_plan
from .render.inline import build_html
from .render.text import render_plan_text


def _read_request(parts: list[str]) -> str:
    if parts:
        return " ".join(parts)
    if sys.stdin is None or sys.stdin.isatty():
        return ""
    return sys.stdin.read()


def _write_html(html: str, out: str, default_out: str) -> str:
    out_path = os.path.abspath(out)
    try:
        Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        # If caller used the default relative path from an unwritable CWD,
        # transparently fall back to a user-writable location.
        if out == default_out:
            fallback = Path.home() / ".opsm" / "build" / "opsm_plan.html"
            fallback.parent.mkdir(parents=True, exist_ok=True)
            out_path = str(fallback)
            print(
                f"[opsm] WARN: default output directory is not writable; using {out_path}",
                file=sys.stderr,
            )
        else:
            raise SystemExit(f"Cannot create output directory '{Path(out_path).parent}': {e}")
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(html)
    return out_path


def main(argv: list[str] | None = None) -> int:
    default_out = os.path.join("build", "opsm_plan.html")
    ap = argparse.ArgumentParser(
        prog="opsm-shell",
        description="Group a free-form package request by install backend and show the plan.",
    )
    ap.add_argument("request", nargs="*", help="Request text, e.g. 'toolbox: vim [container: htop tmux]' (default: stdin)")
    ap.add_argument(
        "--mode",
        default=os.getenv("OPSM_MODE", DEFAULT_MODE),
        help=f"UI mode: {', '.join(MODES)} (default: env OPSM_MODE or '{DEFAULT_MODE}')",
    )
    ap.add_argument("--format", choices=("text", "json", "html"), default="text", help="Output format (default: text)")
    ap.add_argument("--tokens", action="store_true", help="Print the token list and exit")
    ap.add_argument("--probe", action="store_true", help="Probe the host for the backends used by the plan")
    ap.add_argument("--dry-run", action="store_true", help="Include the dry-run command preview")
    ap.add_argument(
        "--execute-dry-run",
        action="store_true",
        help="Run the dry-run commands that have a side-effect-free form (implies --dry-run)",
    )
    ap.add_argument("--out", default=default_out, help="Output HTML path for --format html (default: ./build/opsm_plan.html)")
    ap.add_argument("--no-open", action="store_true", help="Do not open the generated HTML in a browser")

    args = ap.parse_args(argv)

    try:
        mode = normalize_mode(args.mode)
    except ValueError as e:
        raise SystemExit(f"Invalid --mode value: {e}")

    text = _read_request(args.request)

    if args.tokens:
        for tok in tokenize_plan(text):
            print(tok)
        return 0

    data = build_payload(
        text,
        mode=mode,
        probe=bool(args.probe),
        dry_run=bool(args.dry_run),
        execute_dry_run=bool(args.execute_dry_run),
    )

    if args.format == "json":
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return 0
    if args.format == "text":
        print(render_plan_text(data))
        return 0

    out_path = _write_html(build_html(data), args.out, default_out)
    print(out_path)

    if not args.no_open:
        try:
            webbrowser.open("file://" + out_path)
        except webbrowser.Error:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
