# opsm/render/inline_js.py
from __future__ import annotations

from .js.part01_core import JS_PART as JS_01
from .js.part02_host_events import JS_PART as JS_02

JS_BLOCK = "\n".join([
  JS_01, JS_02
])
