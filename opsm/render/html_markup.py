# opsm/render/html_markup.py
from __future__ import annotations

from .markup.header import MARKUP as HEADER
from .markup.plan_panel import MARKUP as PLAN_PANEL

BODY_MARKUP = HEADER + PLAN_PANEL
