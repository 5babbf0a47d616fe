"""opsm-shell Python package.

Public API:
  - import from `opsm.api` (preferred) or `import opsm` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)

from .api import (
    build_html,
    build_payload,
    parse_plan,
    tokenize_plan,
)
