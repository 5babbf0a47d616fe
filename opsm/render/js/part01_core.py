# opsm/render/js/part01_core.py
from __future__ import annotations

JS_PART = r'''
(() => {
  "use strict";

  const elData = document.getElementById("opsm-data");
  let DATA = {};
  try {
    DATA = JSON.parse((elData && elData.textContent) || "{}") || {};
  } catch (e) {
    console.error("opsm: payload parse failed", e);
  }

  const MODES = ["basic", "advanced"];
  const modeSelect = document.getElementById("mode");
  const elRequest = document.getElementById("request");

  function el(tag, cls, text) {
    const n = document.createElement(tag);
    if (cls) n.className = cls;
    if (text != null) n.textContent = String(text);
    return n;
  }

  function setMode(value) {
    if (MODES.indexOf(value) < 0) return;
    document.body.setAttribute("data-mode", value);
    if (modeSelect) modeSelect.value = value;
    renderRerunHint();
  }

  function renderTokens() {
    const box = document.getElementById("tokens");
    if (!box) return;
    box.textContent = "";
    (DATA.tokens || []).forEach(t => {
      const s = String(t);
      const grouped = s.length >= 2 && s[0] === "[" && s[s.length - 1] === "]";
      box.appendChild(el("span", grouped ? "tok group" : "tok", s));
    });
  }

  function renderPlan() {
    const body = document.getElementById("planRows");
    const empty = document.getElementById("planEmpty");
    if (!body) return;
    body.textContent = "";
    const rows = Array.isArray(DATA.plan) ? DATA.plan : [];
    rows.forEach(e => {
      const tr = el("tr");
      tr.appendChild(el("td", "backend", e.backend));
      tr.appendChild(el("td", "packages", (e.packages || []).join(", ")));
      const status = String(e.status || "unknown");
      tr.appendChild(el("td", "st-" + status.split(" ")[0], status));
      body.appendChild(tr);
    });
    if (empty) empty.hidden = rows.length > 0;
  }

  function renderDryRun() {
    const list = document.getElementById("dryRun");
    if (!list) return;
    list.textContent = "";
    (DATA.dry_run || []).forEach(step => {
      const li = el("li", null, step.preview);
      if (step.status) li.appendChild(el("span", "st-" + step.status, " [" + step.status + "]"));
      if (step.output) li.appendChild(el("pre", null, step.output));
      list.appendChild(li);
    });
  }
'''
