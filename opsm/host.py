# opsm/host.py
from __future__ import annotations

import os
import shlex
import subprocess
import time
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .model import BackendStatus, DryRunResult, DryRunStep, Plan
from .util.console import eprint, obs_enabled

BACKEND_BINARIES: Dict[str, Optional[str]] = {
    "rpm-ostree": "rpm-ostree",
    "toolbox": "toolbox",
    "distrobox": "distrobox",
    "container": "podman",
    "native": "dnf",
    "git": "git",
    "source": "make",
    "auto": None,
}

# Order in which "auto" picks a concrete backend.
AUTO_PREFERENCE: Tuple[str, ...] = ("rpm-ostree", "native", "toolbox", "distrobox")

_OUTPUT_LIMIT = 4000


def _timeout_from_env(name: str, default: float) -> float:
    raw = (os.getenv(name, str(default)) or "").strip()
    try:
        v = float(raw)
        if v > 0:
            return v
    except ValueError:
        pass
    return default


def _probe_timeout_s() -> float:
    return _timeout_from_env("OPSM_PROBE_TIMEOUT_S", 5.0)


def _dry_run_timeout_s() -> float:
    return _timeout_from_env("OPSM_DRY_RUN_TIMEOUT_S", 60.0)


def _decode(proc: subprocess.CompletedProcess) -> str:
    out = b""
    if proc.stdout:
        out += proc.stdout
    if proc.stdout and proc.stderr:
        out += b"\n"
    if proc.stderr:
        out += proc.stderr
    return out.decode("utf-8", errors="replace").strip()


def probe_backend(backend: str, *, timeout_s: Optional[float] = None) -> BackendStatus:
    """Ask the host whether a backend's binary is usable (``<binary> --version``)."""
    binary = BACKEND_BINARIES.get(backend)
    if binary is None:
        return BackendStatus(backend=backend, status="auto")

    timeout_s = timeout_s if timeout_s and timeout_s > 0 else _probe_timeout_s()
    cmd = [binary, "--version"]
    t0 = time.monotonic()
    try:
        proc = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
            timeout=timeout_s,
        )
    except FileNotFoundError:
        if obs_enabled():
            eprint(f"[opsm.host] probe.missing backend={backend} binary={binary}")
        return BackendStatus(backend=backend, status="missing", binary=binary)
    except subprocess.TimeoutExpired:
        if obs_enabled():
            eprint(f"[opsm.host] probe.timeout backend={backend} after={timeout_s:.1f}s")
        return BackendStatus(backend=backend, status="timeout", binary=binary)

    elapsed_ms = int((time.monotonic() - t0) * 1000)
    text = _decode(proc)
    if proc.returncode != 0:
        if obs_enabled():
            eprint(f"[opsm.host] probe.error backend={backend} exit={proc.returncode} ms={elapsed_ms}")
        return BackendStatus(backend=backend, status="error", binary=binary, elapsed_ms=elapsed_ms)

    version = text.splitlines()[0].strip() if text else None
    if obs_enabled():
        eprint(f"[opsm.host] probe.ok backend={backend} ms={elapsed_ms} version={version or '-'}")
    return BackendStatus(
        backend=backend,
        status="available",
        binary=binary,
        version=version,
        elapsed_ms=elapsed_ms,
    )


def probe_backends(backends: Iterable[str], *, timeout_s: Optional[float] = None) -> Dict[str, BackendStatus]:
    out: Dict[str, BackendStatus] = {}
    for b in backends:
        if b in out:
            continue
        out[b] = probe_backend(b, timeout_s=timeout_s)
    return out


def resolve_auto_backend(statuses: Optional[Mapping[str, BackendStatus]]) -> Optional[str]:
    if not statuses:
        return None
    for b in AUTO_PREFERENCE:
        st = statuses.get(b)
        if st is not None and st.status == "available":
            return b
    return None


def _argv_for(backend: str, packages: Sequence[str]) -> List[Tuple[str, ...]]:
    # "--" ends option parsing; package strings are never read as flags.
    pkgs = tuple(packages)
    if backend == "rpm-ostree":
        return [("rpm-ostree", "install", "--dry-run", "--") + pkgs]
    if backend == "toolbox":
        return [("toolbox", "run", "sudo", "dnf", "install", "--assumeno", "--") + pkgs]
    if backend == "distrobox":
        return [("distrobox", "enter", "--", "sudo", "dnf", "install", "--assumeno", "--") + pkgs]
    if backend == "native":
        return [("dnf", "install", "--assumeno", "--") + pkgs]
    if backend == "container":
        return [("podman", "search", "--limit", "1", "--", p) for p in pkgs]
    if backend == "git":
        return [("git", "ls-remote", "--heads", "--", p) for p in pkgs]
    return []


def dry_run_commands(plan: Plan, statuses: Optional[Mapping[str, BackendStatus]] = None) -> List[DryRunStep]:
    """Build the per-backend dry-run preview for a plan, in plan order.

    Nothing is executed here. "auto" uses the first available preferred
    backend when statuses are given; "source" and unresolved "auto" get a
    preview line only.
    """
    steps: List[DryRunStep] = []
    for backend, packages in plan.items():
        if not packages:
            continue
        target: Optional[str] = backend
        if backend == "auto":
            target = resolve_auto_backend(statuses)

        argvs = _argv_for(target, packages) if target else []
        if not argvs:
            if backend == "source":
                note = "build from source"
            elif target is None:
                note = "backend chosen at install time"
            else:
                note = f"no dry-run form for {target}"
            steps.append(
                DryRunStep(
                    backend=backend,
                    target=target,
                    packages=tuple(packages),
                    argv=(),
                    preview=f"# {note}: {' '.join(packages)}",
                )
            )
            continue

        per_package = target in ("container", "git")
        for i, argv in enumerate(argvs):
            steps.append(
                DryRunStep(
                    backend=backend,
                    target=target,
                    packages=(packages[i],) if per_package else tuple(packages),
                    argv=argv,
                    preview=shlex.join(argv),
                )
            )
    return steps


def run_dry_run(step: DryRunStep, *, timeout_s: Optional[float] = None) -> DryRunResult:
    if not step.argv:
        return DryRunResult(step=step, status="skipped", output=step.preview)

    timeout_s = timeout_s if timeout_s and timeout_s > 0 else _dry_run_timeout_s()
    t0 = time.monotonic()
    try:
        proc = subprocess.run(
            list(step.argv),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
            timeout=timeout_s,
        )
    except FileNotFoundError:
        return DryRunResult(step=step, status="missing", output=f"{step.argv[0]}: not found on PATH")
    except subprocess.TimeoutExpired:
        return DryRunResult(step=step, status="timeout", output=f"timed out after {timeout_s:.1f}s")

    elapsed_ms = int((time.monotonic() - t0) * 1000)
    text = _decode(proc)
    if len(text) > _OUTPUT_LIMIT:
        text = text[:_OUTPUT_LIMIT] + "\n..."
    # dnf --assumeno exits 1 after printing the transaction.
    ok = proc.returncode == 0 or ("--assumeno" in step.argv and proc.returncode == 1)
    if obs_enabled():
        eprint(f"[opsm.host] dry_run backend={step.backend} exit={proc.returncode} ms={elapsed_ms}")
    return DryRunResult(
        step=step,
        status="ok" if ok else "failed",
        returncode=proc.returncode,
        output=text,
        elapsed_ms=elapsed_ms,
    )
