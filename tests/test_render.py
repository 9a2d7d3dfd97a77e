"""Tests for markdown rendering and its post-processing passes.

Guards the guarantees the pager relies on: no raw emphasis markers, compact
blank lines, a fixed left margin, colour-free output on request, and
deterministic results for identical input.
"""

from __future__ import annotations

import unittest

from mdview.ansi import display_width, strip_ansi
from mdview.render import (
    RenderOptions,
    available_code_styles,
    build_artifact,
    collapse_blank_lines,
    indent_lines,
    render,
    resolve_code_style,
    restyle_leftover_markup,
)

SAMPLE = """# Title

Some **bold** words, some *italic* words and `inline code`.

## Section

> quoted line

- first
- second

```python
def hello():
    return "world"
```
"""


class RenderOutputTests(unittest.TestCase):
    def test_emphasis_markers_never_leak(self) -> None:
        for options in (RenderOptions(), RenderOptions(no_color=True)):
            plain = strip_ansi(render("Some **bold** and *italic* and `code` here.", options))

            self.assertNotIn("*", plain)
            self.assertNotIn("`", plain)
            self.assertIn("bold", plain)
            self.assertIn("italic", plain)
            self.assertIn("code", plain)

    def test_every_line_has_left_margin(self) -> None:
        out = render(SAMPLE)

        for line in out.split("\n"):
            self.assertTrue(line.startswith("  "), repr(line))

    def test_render_is_deterministic(self) -> None:
        options = RenderOptions(width=60, code_theme="monokai")

        self.assertEqual(render(SAMPLE, options), render(SAMPLE, options))

    def test_no_color_output_has_no_escape_codes(self) -> None:
        out = render(SAMPLE, RenderOptions(no_color=True))

        self.assertNotIn("\x1b", out)
        self.assertIn("Title", out)

    def test_colored_output_contains_styling(self) -> None:
        out = render(SAMPLE)

        self.assertIn("\x1b[", out)

    def test_headings_are_prefixed_with_level_markers(self) -> None:
        plain = strip_ansi(render("# Title\n\n## Section\n", RenderOptions(no_color=True)))
        lines = [line.strip() for line in plain.split("\n") if line.strip()]

        self.assertEqual(lines, ["# Title", "## Section"])

    def test_paragraphs_reflow_to_configured_width(self) -> None:
        text = " ".join(["word"] * 80)
        out = render(text, RenderOptions(width=40, no_color=True))
        lines = out.split("\n")

        self.assertGreater(len(lines), 1)
        for line in lines:
            self.assertLessEqual(display_width(line), 42)

    def test_emoji_shortcodes_are_substituted(self) -> None:
        plain = strip_ansi(render("Ship it :rocket:", RenderOptions(no_color=True)))

        self.assertIn("\U0001f680", plain)
        self.assertNotIn(":rocket:", plain)

    def test_html_entities_are_decoded(self) -> None:
        plain = strip_ansi(render("AT&amp;T &copy; 2024", RenderOptions(no_color=True)))

        self.assertIn("AT&T", plain)
        self.assertIn("©", plain)

    def test_no_runs_of_blank_lines_remain(self) -> None:
        out = render("first\n\n\n\n\nsecond\n\n\n\n---\n\n\n\nthird\n", RenderOptions(no_color=True))
        lines = out.split("\n")

        for previous, current in zip(lines, lines[1:]):
            self.assertFalse(previous.strip() == "" and current.strip() == "", repr(out))

    def test_blank_lines_inside_code_blocks_are_preserved(self) -> None:
        source = "```python\ndef a():\n    pass\n\n\ndef b():\n    pass\n```\n"
        lines = strip_ansi(render(source, RenderOptions(no_color=True))).split("\n")

        first_pass = next(i for i, line in enumerate(lines) if "pass" in line)
        second_def = next(i for i, line in enumerate(lines) if "def b():" in line)
        self.assertEqual(second_def - first_pass, 3)

    def test_tables_render_as_rows(self) -> None:
        plain = strip_ansi(render("| a | b |\n|---|---|\n| 1 | 2 |\n", RenderOptions(no_color=True)))
        lines = plain.split("\n")

        self.assertNotIn("|---|", plain)
        header = next(i for i, line in enumerate(lines) if "a" in line and "b" in line)
        row = next(i for i, line in enumerate(lines) if "1" in line and "2" in line)
        self.assertGreater(row, header)

    def test_emoji_shortcodes_in_code_are_left_alone(self) -> None:
        source = "Launch :rocket: with `:rocket:`\n\n```\necho :rocket:\n```\n"
        plain = strip_ansi(render(source, RenderOptions(no_color=True)))

        self.assertEqual(plain.count("\U0001f680"), 1)
        self.assertEqual(plain.count(":rocket:"), 2)


class PostProcessingTests(unittest.TestCase):
    def test_collapse_blank_lines_keeps_a_single_separator(self) -> None:
        self.assertEqual(collapse_blank_lines("a\n\n\n\nb"), "a\n\nb")
        self.assertEqual(collapse_blank_lines("a\n\nb"), "a\n\nb")
        self.assertEqual(collapse_blank_lines("a\nb"), "a\nb")

    def test_collapse_treats_escape_only_lines_as_empty(self) -> None:
        self.assertEqual(collapse_blank_lines("a\n\x1b[0m\x1b[0m\n\n\nb"), "a\n\x1b[0m\x1b[0m\nb")

    def test_collapse_keeps_padded_rows(self) -> None:
        text = "a\n\x1b[40m    \x1b[0m\n\x1b[40m    \x1b[0m\nb"

        self.assertEqual(collapse_blank_lines(text), text)

    def test_restyle_leftover_markup_without_color_drops_markers(self) -> None:
        self.assertEqual(
            restyle_leftover_markup("a **b** and *c* and `d`", no_color=True),
            "a b and c and d",
        )

    def test_restyle_leftover_markup_applies_styles(self) -> None:
        out = restyle_leftover_markup("a **b** and *c* and `d`")

        self.assertNotIn("*", out)
        self.assertNotIn("`", out)
        self.assertIn("\x1b[", out)
        self.assertEqual(strip_ansi(out), "a b and c and d")

    def test_restyle_does_not_span_lines(self) -> None:
        self.assertEqual(restyle_leftover_markup("a * b\nc * d", no_color=True), "a * b\nc * d")

    def test_indent_lines_prefixes_every_line(self) -> None:
        self.assertEqual(indent_lines("a\n\nb"), "  a\n  \n  b")


class ArtifactTests(unittest.TestCase):
    def test_artifact_has_header_blank_line_and_body(self) -> None:
        artifact = build_artifact("hello", "notes.md", RenderOptions(no_color=True))

        self.assertEqual(artifact.name, "notes.md")
        lines = artifact.body.split("\n")
        self.assertEqual(lines[0], "   notes.md ")
        self.assertEqual(lines[1], "")
        self.assertIn("hello", lines[2])
        self.assertTrue(artifact.body.endswith("\n"))

    def test_colored_header_is_reverse_video(self) -> None:
        artifact = build_artifact("hello", "notes.md")

        header = artifact.body.split("\n")[0]
        self.assertIn("7", header.split("m")[0])
        self.assertEqual(strip_ansi(header), "   notes.md ")


class CodeStyleTests(unittest.TestCase):
    def test_resolve_code_style_accepts_known_pygments_style(self) -> None:
        self.assertEqual(resolve_code_style("friendly"), "friendly")

    def test_resolve_code_style_falls_back_for_unknown_style(self) -> None:
        with self.assertLogs("mdview.render", level="WARNING"):
            self.assertEqual(resolve_code_style("no-such-style"), "monokai")

    def test_available_code_styles_lists_pygments_styles(self) -> None:
        styles = available_code_styles()

        self.assertIn("monokai", styles)
        self.assertEqual(styles, sorted(styles))


if __name__ == "__main__":
    unittest.main()
