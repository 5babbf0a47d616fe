# opsm/render/css/part01_tokens_theme.py
from __future__ import annotations

CSS_PART = r'''  :root{
    --bg: #0b131c;
    --panel: #111c28;
    --line: #223246;
    --text: #dbe6f2;
    --muted: #8aa0b6;
    --accent: #4fb3ff;
    --ok: #5fd38d;
    --warn: #f2b84b;
    --bad: #ff6b6b;
  }

  body {
    margin: 0;
    min-height: 100vh;
    background: linear-gradient(165deg, #080f17 0%, var(--bg) 50%, #060b11 100%);
    color: var(--text);
    font: 14px/1.45 "IBM Plex Sans", "Avenir Next", "Segoe UI", sans-serif;
  }

  header{
    display: flex;
    align-items: center;
    justify-content: space-between;
    padding: 14px 20px;
    border-bottom: 1px solid var(--line);
  }
  .title{ font-size: 18px; font-weight: 600; letter-spacing: 0.04em; }
  .subtitle{ color: var(--muted); font-size: 12px; }
  .mlabel{ color: var(--muted); margin-right: 6px; }
  select, .input{
    background: var(--panel);
    color: var(--text);
    border: 1px solid var(--line);
    border-radius: 6px;
    padding: 6px 8px;
    font: inherit;
  }
'''
