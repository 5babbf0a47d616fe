# opsm/render/markup/header.py
from __future__ import annotations

MARKUP = r"""<header>
  <div class="title-wrap">
    <div class="title">OPSM Shell</div>
    <div class="subtitle">Plan package installs across backends</div>
  </div>
  <div class="mode-wrap">
    <label class="mlabel" for="mode">Mode</label>
    <select id="mode">
      <option value="basic">Basic</option>
      <option value="advanced">Advanced</option>
    </select>
  </div>
</header>
"""
