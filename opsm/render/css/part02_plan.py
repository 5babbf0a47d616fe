# opsm/render/css/part02_plan.py
from __future__ import annotations

CSS_PART = r'''  .layout{ display: grid; gap: 14px; padding: 18px 20px; max-width: 960px; }
  .panel{
    background: var(--panel);
    border: 1px solid var(--line);
    border-radius: 10px;
    padding: 12px 14px;
  }
  .panel-title{ color: var(--muted); text-transform: uppercase; font-size: 11px; margin-bottom: 8px; }
  .input{ width: 100%; box-sizing: border-box; font-family: ui-monospace, monospace; }
  .input:focus{ outline: 2px solid var(--accent); }
  .hint{ margin-top: 6px; color: var(--muted); font-size: 12px; }
  .hint code{ color: var(--text); font-family: ui-monospace, monospace; }

  .tokens{ margin-top: 8px; display: flex; flex-wrap: wrap; gap: 6px; }
  .tok{ border: 1px solid var(--line); border-radius: 4px; padding: 1px 6px; font-family: ui-monospace, monospace; }
  .tok.group{ border-color: var(--accent); }

  table.plan{ width: 100%; border-collapse: collapse; }
  table.plan th, table.plan td{ text-align: left; padding: 6px 8px; border-bottom: 1px solid var(--line); }
  table.plan td.backend{ font-weight: 600; white-space: nowrap; }
  .st-available{ color: var(--ok); }
  .st-missing, .st-error{ color: var(--bad); }
  .st-timeout, .st-unknown{ color: var(--warn); }
  .empty{ color: var(--muted); padding: 6px 0; }

  .dryrun{ margin: 0; padding-left: 20px; font-family: ui-monospace, monospace; }
  .dryrun pre{ margin: 4px 0 8px; color: var(--muted); white-space: pre-wrap; }

  body[data-mode="basic"] .advanced-only{ display: none; }
'''
