# opsm/render/markup/plan_panel.py
from __future__ import annotations

MARKUP = r"""<main class="layout">
  <section class="panel">
    <div class="panel-title">Request</div>
    <input class="input" id="request" type="text" spellcheck="false"
           placeholder="toolbox: vim [container: htop tmux] git: https://example.org/repo.git" />
    <div class="hint" id="rerunHint">Edit the request, then re-run: <code id="rerunCmd"></code></div>
    <div class="tokens advanced-only" id="tokens"></div>
  </section>

  <section class="panel">
    <div class="panel-title">Plan</div>
    <table class="plan">
      <thead><tr><th>Backend</th><th>Packages</th><th>Status</th></tr></thead>
      <tbody id="planRows"></tbody>
    </table>
    <div class="empty" id="planEmpty" hidden>Nothing to install.</div>
  </section>

  <section class="panel advanced-only" id="dryRunPanel">
    <div class="panel-title">Dry run</div>
    <ol class="dryrun" id="dryRun"></ol>
  </section>
</main>
"""
