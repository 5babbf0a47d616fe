# opsm/render/js/part02_host_events.py
from __future__ import annotations

JS_PART = r'''
  if (modeSelect) {
    modeSelect.addEventListener("change", (event) => {
      setMode(event.target.value);
    });
  }

  // Optional host shell integration (menu events)
  if (window.__TAURI__ && window.__TAURI__.event) {
    window.__TAURI__.event.listen("opsm:mode", (event) => {
      if (event && event.payload) {
        setMode(event.payload);
      }
    });

    window.__TAURI__.event.listen("opsm:dry-run", () => {
      const input = document.querySelector(".input");
      if (input) {
        input.focus();
      }
    });
  }

  function shellQuote(s) {
    return "'" + String(s).replace(/'/g, "'\\''") + "'";
  }

  function renderRerunHint() {
    const code = document.getElementById("rerunCmd");
    if (!code) return;
    const mode = document.body.getAttribute("data-mode") || "basic";
    const req = elRequest ? elRequest.value.trim() : "";
    code.textContent = "opsm-shell --format html --mode " + mode + (req ? " " + shellQuote(req) : "");
  }

  if (elRequest) {
    elRequest.value = String(DATA.input || "");
    elRequest.addEventListener("input", renderRerunHint);
  }
  setMode((DATA.meta && DATA.meta.mode) || "basic");
  renderTokens();
  renderPlan();
  renderDryRun();
})();
'''
