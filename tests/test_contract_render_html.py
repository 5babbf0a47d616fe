from __future__ import annotations

import re
import tempfile
import unittest
from pathlib import Path

from opsm.api import load_payload_from_html
from opsm.html_extract import HtmlPayloadExtractError, extract_payload_from_html_text
from opsm.payload import build_payload
from opsm.render.inline import build_html
from opsm.render.template import HTML_TEMPLATE
from opsm.render.text import render_plan_text


class TestRenderHtmlContract(unittest.TestCase):
    def test_template_has_single_data_marker(self) -> None:
        self.assertEqual(HTML_TEMPLATE.count("__DATA_JSON__"), 1)
        for marker in ("__CSS_BLOCK__", "__JS_BLOCK__", "__BODY_MARKUP__"):
            self.assertNotIn(marker, HTML_TEMPLATE)

    def test_page_carries_mode_switch_and_host_events(self) -> None:
        html = build_html(build_payload("vim"))
        self.assertTrue(html.startswith("<!doctype html>"))
        self.assertIn('id="mode"', html)
        self.assertIn('class="input"', html)
        self.assertIn('"opsm:mode"', html)
        self.assertIn('"opsm:dry-run"', html)
        self.assertIn('id="opsm-data"', html)

    def test_request_field_is_editable_with_rerun_hint(self) -> None:
        html = build_html(build_payload("vim"))
        m = re.search(r"<input\b[^>]*\bid=\"request\"[^>]*>", html)
        self.assertIsNotNone(m)
        self.assertNotIn("readonly", m.group(0))
        self.assertIn('id="rerunCmd"', html)
        self.assertIn("opsm-shell --format html --mode ", html)

    def test_embedded_payload_roundtrips(self) -> None:
        payload = build_payload("toolbox: vim [container: htop tmux] git:https://x/y.git", mode="advanced", dry_run=True)
        html = build_html(payload)
        self.assertEqual(extract_payload_from_html_text(html), payload)

    def test_script_close_in_input_is_escaped(self) -> None:
        payload = build_payload("</script><b>x</b> native:&amp;")
        html = build_html(payload)
        self.assertEqual(html.lower().count("</script>"), 2)
        self.assertEqual(extract_payload_from_html_text(html), payload)

    def test_build_html_rejects_non_dict(self) -> None:
        with self.assertRaises(TypeError):
            build_html([])  # type: ignore[arg-type]

    def test_missing_payload_block_raises(self) -> None:
        with self.assertRaises(HtmlPayloadExtractError):
            extract_payload_from_html_text("<html><body>nothing</body></html>")

    def test_load_payload_from_html_file(self) -> None:
        payload = build_payload("git: r1 r2")
        with tempfile.TemporaryDirectory() as td:
            out = Path(td) / "plan.html"
            out.write_text(build_html(payload), encoding="utf-8")
            self.assertEqual(load_payload_from_html(out), payload)

    def test_text_rendering(self) -> None:
        payload = build_payload("toolbox: vim htop git:r")
        self.assertEqual(
            render_plan_text(payload).splitlines(),
            ["toolbox  vim, htop  [unknown]", "git      r  [unknown]"],
        )
        self.assertEqual(render_plan_text(build_payload("  ")), "(empty plan)")

    def test_text_rendering_lists_dry_run(self) -> None:
        txt = render_plan_text(build_payload("source:foo", dry_run=True))
        self.assertIn("dry run:", txt)
        self.assertIn("$ # build from source: foo", txt)


if __name__ == "__main__":
    unittest.main(verbosity=2)
