# opsm/model.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

# Backend tags, in display order.
BACKENDS: Tuple[str, ...] = (
    "rpm-ostree",
    "toolbox",
    "distrobox",
    "container",
    "native",
    "git",
    "source",
    "auto",
)
DEFAULT_BACKEND = "auto"

MODES: Tuple[str, ...] = ("basic", "advanced")
DEFAULT_MODE = "basic"

# Parser-facing types (lightweight)
Token = str
Plan = Dict[str, List[str]]


@dataclass(frozen=True)
class BackendStatus:
    backend: str
    status: str  # "available" | "missing" | "error" | "timeout" | "auto" | "unknown"
    binary: Optional[str] = None
    version: Optional[str] = None
    elapsed_ms: int = 0

    def to_dict(self) -> dict:
        return {
            "backend": self.backend,
            "status": self.status,
            "binary": self.binary,
            "version": self.version,
        }


@dataclass(frozen=True)
class DryRunStep:
    backend: str
    target: Optional[str]  # backend whose command is used (auto resolves)
    packages: Tuple[str, ...]
    argv: Tuple[str, ...]
    preview: str

    def to_dict(self) -> dict:
        return {
            "backend": self.backend,
            "target": self.target,
            "packages": list(self.packages),
            "argv": list(self.argv),
            "preview": self.preview,
        }


@dataclass(frozen=True)
class DryRunResult:
    step: DryRunStep
    status: str  # "ok" | "failed" | "missing" | "timeout" | "skipped"
    returncode: Optional[int] = None
    output: str = ""
    elapsed_ms: int = 0

    def to_dict(self) -> dict:
        d = self.step.to_dict()
        d.update(
            {
                "status": self.status,
                "returncode": self.returncode,
                "output": self.output,
            }
        )
        return d


__all__ = [
    "BACKENDS",
    "DEFAULT_BACKEND",
    "MODES",
    "DEFAULT_MODE",
    "Token",
    "Plan",
    "BackendStatus",
    "DryRunStep",
    "DryRunResult",
]
