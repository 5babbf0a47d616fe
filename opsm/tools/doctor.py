from __future__ import annotations

import argparse
import re
import sys
sys.dont_write_bytecode = True
from pathlib import Path
from typing import List, Tuple

SMOKE_REQUEST = "toolbox: vim [container: htop tmux] extra git:https://example.org/r.git"


def _find_repo_root(start: Path) -> Path | None:
    cur = start.resolve()
    for _ in range(12):
        if (cur / "opsm" / "__init__.py").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


# Each render part directory and the module that must import every part in it.
RENDER_ASSEMBLERS = {
    "css": "inline_css.py",
    "js": "inline_js.py",
    "markup": "html_markup.py",
}


def _scan_tree(root: Path) -> Tuple[List[str], List[str]]:
    """Check the opsm package tree.

    Errors: render parts no assembler imports (they never reach the page)
    and patch rejects left in the package. Warning: rendered pages inside
    the package (they belong in build/).
    """

    warnings: List[str] = []
    errors: List[str] = []

    pkg = root / "opsm"
    render = pkg / "render"
    for part_dir, assembler in RENDER_ASSEMBLERS.items():
        asm_path = render / assembler
        asm_text = asm_path.read_text(encoding="utf-8") if asm_path.exists() else ""
        for part in sorted((render / part_dir).glob("*.py")):
            ref = re.compile(rf"from \.{part_dir}\.{re.escape(part.stem)} import\b")
            if not ref.search(asm_text):
                errors.append(f"Render part not assembled: opsm/render/{part_dir}/{part.name} (import it in {assembler})")

    for p in sorted(pkg.rglob("*")):
        if "__pycache__" in p.parts or not p.is_file():
            continue
        rel = str(p.relative_to(root))
        if p.name.endswith((".rej", ".orig")):
            errors.append(f"Patch artifact present: {rel}")
        if p.suffix == ".html":
            warnings.append(f"Rendered page inside the package: {rel} (write pages to build/)")

    return warnings, errors


def _smoke_build() -> Tuple[List[str], List[str]]:
    warnings: List[str] = []
    errors: List[str] = []

    try:
        from opsm.html_extract import extract_payload_from_html_text
        from opsm.payload import build_payload
        from opsm.render.inline import build_html
        from opsm.validate import validate_payload
    except ImportError as e:
        errors.append(f"Import failed: opsm ({e})")
        return warnings, errors

    payload = build_payload(SMOKE_REQUEST, mode="advanced", dry_run=True)
    errs = validate_payload(payload)
    if errs:
        errors.extend(f"smoke payload: {e}" for e in errs)
        return warnings, errors

    try:
        html = build_html(payload)
    except (TypeError, RuntimeError) as e:
        errors.append(f"build_html(payload) raised: {e}")
        return warnings, errors

    if "__DATA_JSON__" in html:
        errors.append("HTML still contains __DATA_JSON__ placeholder (template injection failed)")
        return warnings, errors

    if extract_payload_from_html_text(html) != payload:
        errors.append("Payload extracted from HTML differs from the rendered payload")
    backends = [e["backend"] for e in payload["plan"]]
    if backends != ["toolbox", "container", "git"]:
        warnings.append(f"Smoke plan backends look unusual: {backends} (verify parser changes)")

    return warnings, errors


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="opsm.tools.doctor", description="Repository hygiene & smoke checks for opsm.")
    ap.add_argument("--root", default="", help="Repo root (defaults to auto-detect from CWD).")
    ap.add_argument("--strict", action="store_true", help="Treat warnings as errors (exit code 2).")
    args = ap.parse_args(argv)

    root = Path(args.root).expanduser() if args.root else _find_repo_root(Path.cwd())
    if not root:
        print("ERROR: Could not locate repo root (expected opsm/__init__.py). Run with --root /path/to/repo", file=sys.stderr)
        return 2

    sys.path.insert(0, str(root))

    print(f"[opsm-doctor] repo_root: {root}")
    print(f"[opsm-doctor] python: {sys.executable}")

    warnings: List[str] = []
    errors: List[str] = []

    w1, e1 = _scan_tree(root)
    warnings += w1
    errors += e1

    w2, e2 = _smoke_build()
    warnings += w2
    errors += e2

    if errors:
        print("\n[opsm-doctor] ERRORS:")
        for e in errors:
            print(f"  - {e}")
    if warnings:
        print("\n[opsm-doctor] WARNINGS:")
        for w in warnings:
            print(f"  - {w}")

    if errors:
        print("\n[opsm-doctor] RESULT: FAIL")
        return 2
    if warnings and args.strict:
        print("\n[opsm-doctor] RESULT: WARN (strict => FAIL)")
        return 2
    if warnings:
        print("\n[opsm-doctor] RESULT: WARN")
        return 1
    print("\n[opsm-doctor] RESULT: OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
