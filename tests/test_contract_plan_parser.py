# OPSM_PLAN_LANG_V1
from __future__ import annotations

import unittest

from opsm.model import BACKENDS
from opsm.plan_lang import interpret_tokens, normalize_backend, parse_plan, tokenize_plan


class TestPlanParserContract(unittest.TestCase):
    def test_empty_input_gives_empty_plan(self) -> None:
        self.assertEqual(parse_plan(""), {})

    def test_bare_packages_go_to_auto(self) -> None:
        self.assertEqual(parse_plan("foo bar"), {"auto": ["foo", "bar"]})

    def test_colon_remainder_is_one_package(self) -> None:
        self.assertEqual(parse_plan("git:https://example.org/a.git"), {"git": ["https://example.org/a.git"]})
        self.assertEqual(parse_plan("native:a:b"), {"native": ["a:b"]})

    def test_bare_prefix_moves_cursor_for_following_tokens(self) -> None:
        # "git:" has nothing after the colon, so it only moves the cursor;
        # whitespace already split the rest into separate plain tokens.
        self.assertEqual(parse_plan("git: mypkg anotherpkg"), {"git": ["mypkg", "anotherpkg"]})

    def test_cursor_switches_per_prefix(self) -> None:
        self.assertEqual(parse_plan("toolbox: vim git: curl"), {"toolbox": ["vim"], "git": ["curl"]})

    def test_bracket_group_sets_cursor_going_forward(self) -> None:
        self.assertEqual(
            parse_plan("[container: htop tmux] extra"),
            {"container": ["htop", "tmux", "extra"]},
        )

    def test_unknown_backend_collapses_to_auto(self) -> None:
        self.assertEqual(parse_plan("unknownbackend: pkg"), {"auto": ["pkg"]})
        self.assertEqual(parse_plan("flatpak:org.gimp.GIMP"), {"auto": ["org.gimp.GIMP"]})

    def test_backend_names_are_case_insensitive(self) -> None:
        self.assertEqual(parse_plan("ToolBox:vim [RPM-OSTREE: a]"), {"toolbox": ["vim"], "rpm-ostree": ["a"]})

    def test_bracket_without_colon_only_sets_cursor(self) -> None:
        self.assertEqual(parse_plan("[Native] vim"), {"native": ["vim"]})
        self.assertEqual(parse_plan("[whatever] vim"), {"auto": ["vim"]})

    def test_bracket_does_not_rewrite_earlier_entries(self) -> None:
        self.assertEqual(
            parse_plan("a [git: r1] b"),
            {"auto": ["a"], "git": ["r1", "b"]},
        )

    def test_bare_prefix_without_packages_adds_no_key(self) -> None:
        self.assertEqual(parse_plan("toolbox: git:"), {})
        self.assertEqual(parse_plan("[source:]"), {})

    def test_duplicates_are_preserved_in_order(self) -> None:
        self.assertEqual(parse_plan("vim vim native: vim vim"), {"auto": ["vim", "vim"], "native": ["vim", "vim"]})

    def test_backend_key_order_follows_first_append(self) -> None:
        plan = parse_plan("git: r toolbox: a git: s")
        self.assertEqual(list(plan.keys()), ["git", "toolbox"])
        self.assertEqual(plan["git"], ["r", "s"])

    def test_no_empty_lists(self) -> None:
        plan = parse_plan("toolbox: [git:] container: x [native]")
        self.assertEqual(plan, {"container": ["x"]})
        for pkgs in plan.values():
            self.assertTrue(pkgs)

    def test_every_backend_tag_is_recognised(self) -> None:
        for b in BACKENDS:
            self.assertEqual(normalize_backend(f"  {b.upper()} "), b)
            self.assertEqual(parse_plan(f"{b}:pkg"), {b: ["pkg"]})

    def test_interpret_accepts_any_token_iterable(self) -> None:
        toks = iter(tokenize_plan("[distrobox: a b] c"))
        self.assertEqual(interpret_tokens(toks), {"distrobox": ["a", "b", "c"]})

    def test_each_parse_starts_fresh(self) -> None:
        parse_plan("git:")
        self.assertEqual(parse_plan("vim"), {"auto": ["vim"]})


if __name__ == "__main__":
    unittest.main(verbosity=2)
