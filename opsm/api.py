"""opsm.api

Stable *library* entrypoint for opsm-shell.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Union

from opsm.host import (
    dry_run_commands,
    probe_backend,
    probe_backends,
    resolve_auto_backend,
    run_dry_run,
)
from opsm.html_extract import (
    HtmlPayloadExtractError,
    extract_payload_from_html_file,
    extract_payload_from_html_text,
)
from opsm.model import (
    BACKENDS,
    DEFAULT_BACKEND,
    DEFAULT_MODE,
    MODES,
    BackendStatus,
    DryRunResult,
    DryRunStep,
    Plan,
    Token,
)
from opsm.payload import build_payload, plan_from_payload
from opsm.plan_lang import (
    interpret_tokens,
    is_bracket_token,
    normalize_backend,
    parse_plan,
    tokenize_plan,
)
from opsm.render.inline import build_html
from opsm.render.text import render_plan_text
from opsm.validate import PayloadValidationError, assert_valid_payload, validate_payload

HtmlPath = Union[str, Path]
Payload = Dict[str, Any]


def load_payload_from_html(path: HtmlPath, *, validate: bool = True) -> Payload:
    """Read the payload embedded in a page written by `build_html`."""
    payload = extract_payload_from_html_file(path)
    if validate:
        assert_valid_payload(payload)
    return payload


__all__ = [
    # constants / types
    "BACKENDS",
    "DEFAULT_BACKEND",
    "MODES",
    "DEFAULT_MODE",
    "Plan",
    "Token",
    "BackendStatus",
    "DryRunStep",
    "DryRunResult",
    # parser core
    "normalize_backend",
    "is_bracket_token",
    "tokenize_plan",
    "interpret_tokens",
    "parse_plan",
    # host boundary
    "probe_backend",
    "probe_backends",
    "resolve_auto_backend",
    "dry_run_commands",
    "run_dry_run",
    # payload / rendering
    "build_payload",
    "plan_from_payload",
    "validate_payload",
    "assert_valid_payload",
    "PayloadValidationError",
    "render_plan_text",
    "build_html",
    "extract_payload_from_html_text",
    "extract_payload_from_html_file",
    "HtmlPayloadExtractError",
    "load_payload_from_html",
]
