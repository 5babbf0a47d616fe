# Public helper API: extract the opsm payload JSON from a rendered page
from __future__ import annotations

import html as _html
import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass
class HtmlPayloadExtractError(RuntimeError):
    message: str
    def __str__(self) -> str:
        return self.message


_ID_RE = re.compile(
    r'<script\b[^>]*\bid=["\']opsm-data["\'][^>]*>(?P<body>.*?)</script>',
    flags=re.IGNORECASE | re.DOTALL,
)

_TYPE_RE = re.compile(
    r'<script\b[^>]*\btype=["\']application/json(?:\s*;[^"\']*)?["\'][^>]*>(?P<body>.*?)</script>',
    flags=re.IGNORECASE | re.DOTALL,
)


def _loads_lenient(body: str) -> Any:
    # Raw JSON first; entity-escaped blocks come from hand-edited pages.
    for candidate in (body, _html.unescape(body)):
        try:
            return json.loads(candidate)
        except ValueError:
            continue
    return None


def extract_payload_from_html_text(html_text: str) -> dict[str, Any]:
    """
    Extract the payload JSON from HTML.

    Supported embeddings:
      1) Preferred: <script id="opsm-data"> ...json... </script>   (type may be absent/variant)
      2) Also:      <script type="application/json[;...]" ...> ...json... </script>
    """
    for pat in (_ID_RE, _TYPE_RE):
        for m in pat.finditer(html_text):
            body = (m.group("body") or "").strip()
            if not body:
                continue
            payload = _loads_lenient(body)
            if isinstance(payload, dict):
                return payload

    raise HtmlPayloadExtractError("No <script type='application/json'> payload block found in HTML.")


def extract_payload_from_html_file(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    return extract_payload_from_html_text(p.read_text(encoding="utf-8"))
