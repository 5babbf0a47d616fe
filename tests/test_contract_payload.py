from __future__ import annotations

import subprocess
import unittest
from unittest.mock import patch

from opsm.model import BackendStatus
from opsm.payload import build_payload, normalize_mode, plan_from_payload
from opsm.validate import PayloadValidationError, assert_valid_payload, validate_payload


def _fake_run(cmd, stdout=None, stderr=None, check=None, timeout=None):  # type: ignore[no-untyped-def]
    if cmd[0] in ("dnf", "git"):
        return subprocess.CompletedProcess(cmd, 0, stdout=f"{cmd[0]} 1.0".encode(), stderr=b"")
    raise FileNotFoundError(cmd[0])


class TestPayloadContract(unittest.TestCase):
    def test_payload_shape(self) -> None:
        p = build_payload("toolbox: vim [container: htop tmux] extra", mode="advanced")
        self.assertEqual(validate_payload(p), [])
        self.assertEqual(p["meta"]["mode"], "advanced")
        self.assertEqual(p["tokens"], ["toolbox:", "vim", "[container: htop tmux]", "extra"])
        self.assertEqual(
            p["plan"],
            [
                {"backend": "toolbox", "packages": ["vim"], "status": "unknown"},
                {"backend": "container", "packages": ["htop", "tmux", "extra"], "status": "unknown"},
            ],
        )
        self.assertEqual(p["dry_run"], [])
        self.assertEqual(plan_from_payload(p), {"toolbox": ["vim"], "container": ["htop", "tmux", "extra"]})

    def test_empty_request_is_valid(self) -> None:
        p = build_payload("")
        assert_valid_payload(p)
        self.assertEqual(p["plan"], [])
        self.assertEqual(p["meta"]["mode"], "basic")

    def test_supplied_statuses_label_the_plan(self) -> None:
        statuses = {"git": BackendStatus("git", "available"), "native": BackendStatus("native", "missing")}
        p = build_payload("git:r native:vim source:x", statuses=statuses)
        self.assertEqual([e["status"] for e in p["plan"]], ["available", "missing", "unknown"])
        self.assertEqual(p["backends"]["git"]["status"], "available")

    def test_probe_covers_plan_and_auto_candidates(self) -> None:
        with patch("subprocess.run", side_effect=_fake_run):
            p = build_payload("vim git:r", probe=True)
        self.assertEqual(p["plan"][0], {"backend": "auto", "packages": ["vim"], "status": "via native"})
        self.assertEqual(p["plan"][1]["status"], "available")
        self.assertEqual(p["backends"]["rpm-ostree"]["status"], "missing")
        self.assertEqual(p["backends"]["native"]["version"], "dnf 1.0")

    def test_dry_run_preview_only_does_not_execute(self) -> None:
        with patch("subprocess.run") as run:
            p = build_payload("native: vim", dry_run=True)
        run.assert_not_called()
        self.assertEqual(p["dry_run"][0]["preview"], "dnf install --assumeno -- vim")
        self.assertNotIn("status", p["dry_run"][0])

    def test_execute_dry_run_records_results(self) -> None:
        with patch("subprocess.run", side_effect=_fake_run):
            p = build_payload("native: vim source:x", execute_dry_run=True)
        self.assertEqual([d["status"] for d in p["dry_run"]], ["ok", "skipped"])
        self.assertEqual(validate_payload(p), [])

    def test_mode_is_validated(self) -> None:
        self.assertEqual(normalize_mode(" Advanced "), "advanced")
        with self.assertRaises(ValueError):
            build_payload("vim", mode="expert")

    def test_validator_reports_problems(self) -> None:
        p = build_payload("vim")
        p["plan"].append({"backend": "flatpak", "packages": [], "status": 1})
        p["schema_version"] = 9
        errs = validate_payload(p)
        self.assertTrue(any("schema_version" in e for e in errs))
        self.assertTrue(any("plan[1].backend" in e for e in errs))
        self.assertTrue(any("plan[1].packages" in e for e in errs))
        self.assertTrue(any("plan[1].status" in e for e in errs))
        with self.assertRaises(PayloadValidationError):
            assert_valid_payload(p)
        self.assertEqual(validate_payload([]), ["payload must be dict, got list"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
