"""
Unit tests for the SKILL.md formatter and skill templates.
"""

import os

import pytest

from skilo.config import FmtConfig
from skilo.errors import SkillExistsError
from skilo.skills import (
    TEMPLATES,
    Formatter,
    TemplateContext,
    Validator,
    format_tables,
    parse_manifest,
    render_skill,
    to_title_case,
)

# =============================================================================
# Tables
# =============================================================================


class TestFormatTables:
    """Tests for pipe table alignment."""

    def test_basic_table(self):
        """Test columns are padded to a minimum width of three."""
        assert format_tables("| a | b |\n|---|---|\n| 1 | 2 |") == (
            "| a   | b   |\n|-----|-----|\n| 1   | 2   |"
        )

    def test_widths_follow_content(self):
        """Test the widest cell sets the column width."""
        table = "|Name|Value|\n|-|-|\n|timeout|30|"
        assert format_tables(table) == (
            "| Name    | Value |\n"
            "|---------|-------|\n"
            "| timeout | 30    |"
        )

    def test_alignment(self):
        """Test left, center and right alignment markers."""
        table = "| l | c | r |\n|:--|:-:|--:|\n| x | y | z |"
        assert format_tables(table) == (
            "| l   |  c  |   r |\n"
            "|:----|:---:|----:|\n"
            "| x   |  y  |   z |"
        )

    def test_missing_cells_are_filled(self):
        """Test short rows are padded with empty cells."""
        assert format_tables("| a | b |\n|---|---|\n| 1 |") == (
            "| a   | b   |\n|-----|-----|\n| 1   |     |"
        )

    def test_escaped_pipe_and_code_span(self):
        """Test escaped pipes and pipes in code spans stay in their cell."""
        table = "| expr | note |\n|---|---|\n| `a|b` | x \\| y |"
        lines = format_tables(table).split("\n")
        assert lines[2] == "| `a|b` | x \\| y |"

    def test_code_fence_untouched(self):
        """Test tables inside fenced code blocks are not reformatted."""
        text = "```\n| a | b |\n|---|---|\n```\n"
        assert format_tables(text) == text

    def test_tilde_fence(self):
        """Test ~~~ fences are honored and a ``` line does not close them."""
        text = "~~~\n```\n| a | b |\n|---|---|\n~~~\n"
        assert format_tables(text) == text

    def test_not_a_table(self):
        """Test text with pipes but no separator row."""
        text = "a | b\nplain text\n"
        assert format_tables(text) == text

    def test_surrounding_text_kept(self):
        """Test lines around a table are unchanged."""
        text = "Intro\n\n| a |\n|---|\n| 1 |\n\nOutro\n"
        assert format_tables(text) == "Intro\n\n| a   |\n|-----|\n| 1   |\n\nOutro\n"

    def test_idempotent(self):
        """Test formatting formatted output changes nothing."""
        once = format_tables("| l | c |\n|:--|:-:|\n| long cell | y |")
        assert format_tables(once) == once


# =============================================================================
# Formatter
# =============================================================================


class TestFormatter:
    """Tests for whole-file formatting."""

    def test_sorts_frontmatter(self, make_skill):
        """Test frontmatter keys are rewritten in canonical order."""
        content = "---\nlicense: MIT\ndescription: Does things.\nname: my-skill\n---\n\n# Body\n"
        path = make_skill("my-skill", content=content) / "SKILL.md"

        result = Formatter().format_file(path)

        assert result.changed
        assert result.formatted == "---\nname: my-skill\ndescription: Does things.\nlicense: MIT\n---\n\n# Body\n"
        assert result.original == content

    def test_keeps_order_when_unsorted(self, make_skill):
        """Test sort_frontmatter=False preserves the original key order."""
        content = "---\nlicense: MIT\ndescription: Does things.\nname: my-skill\n---\n\n# Body\n"
        path = make_skill("my-skill", content=content) / "SKILL.md"

        result = Formatter(FmtConfig(sort_frontmatter=False)).format_file(path)

        assert not result.changed

    def test_tables_can_be_disabled(self, make_skill):
        """Test format_tables=False leaves tables alone."""
        content = "---\nname: my-skill\ndescription: Does things.\n---\n\n| a |\n|---|\n"
        path = make_skill("my-skill", content=content) / "SKILL.md"

        assert not Formatter(FmtConfig(format_tables=False)).format_file(path).changed
        assert Formatter().format_file(path).changed

    def test_already_formatted(self, make_skill):
        """Test a canonical file is unchanged."""
        path = make_skill("my-skill", description="Does things.") / "SKILL.md"
        assert not Formatter().format_file(path).changed

    def test_normalizes_spacing(self, make_skill):
        """Test extra blank lines after the frontmatter are collapsed."""
        content = "---\nname: my-skill\ndescription: Does things.\n---\n\n\n\n# Body\n"
        path = make_skill("my-skill", content=content) / "SKILL.md"
        assert Formatter().format_file(path).formatted.endswith("---\n\n# Body\n")

    def test_unknown_keys_survive(self, make_skill):
        """Test formatting never drops unknown frontmatter keys."""
        content = "---\ncustom: kept\nname: my-skill\ndescription: Does things.\n---\n\n# Body\n"
        path = make_skill("my-skill", content=content) / "SKILL.md"
        formatted = Formatter().format_file(path).formatted
        assert formatted.startswith("---\nname: my-skill\ndescription: Does things.\ncustom: kept\n---\n")


# =============================================================================
# Templates
# =============================================================================


class TestTemplates:
    """Tests for scaffolding new skills."""

    def test_title_case(self):
        """Test kebab-case to Title Case."""
        assert to_title_case("my-cool-skill") == "My Cool Skill"
        assert to_title_case("pdf") == "Pdf"

    def test_hello_world(self, temp_dir):
        """Test the default template's files."""
        skill_dir = render_skill("hello-world", TemplateContext(name="greeter", description="Says hello."), temp_dir)

        assert skill_dir == temp_dir / "greeter"
        assert (skill_dir / "SKILL.md").is_file()
        assert (skill_dir / "scripts" / "greet.py").read_text(encoding="utf-8").startswith("#!/usr/bin/env python3")
        assert (skill_dir / "references" / ".gitkeep").is_file()
        assert (skill_dir / "assets" / ".gitkeep").is_file()

    @pytest.mark.skipif(os.name == "nt", reason="no execute bits on Windows")
    def test_scripts_are_executable(self, temp_dir):
        """Test generated scripts get mode 755."""
        skill_dir = render_skill("script-based", TemplateContext(name="runner", description="Runs."), temp_dir)
        assert (skill_dir / "scripts" / "run.py").stat().st_mode & 0o777 == 0o755

    def test_no_scripts(self, temp_dir):
        """Test hello-world without scripts."""
        ctx = TemplateContext(name="greeter", description="Says hello.", include_scripts=False)
        skill_dir = render_skill("hello-world", ctx, temp_dir)
        assert not (skill_dir / "scripts").exists()
        assert "scripts/" not in (skill_dir / "SKILL.md").read_text(encoding="utf-8")

    def test_no_optional_dirs(self, temp_dir):
        """Test minimal without references/ and assets/."""
        ctx = TemplateContext(name="tiny", description="Small.", include_optional_dirs=False)
        skill_dir = render_skill("minimal", ctx, temp_dir)
        assert sorted(path.name for path in skill_dir.iterdir()) == ["SKILL.md"]

    def test_full(self, temp_dir):
        """Test the full template's layout."""
        ctx = TemplateContext(name="complete", description="Everything.", lang="bash", license="MIT")
        skill_dir = render_skill("full", ctx, temp_dir)

        assert (skill_dir / "scripts" / "main.sh").is_file()
        assert (skill_dir / "references" / "REFERENCE.md").is_file()
        assert (skill_dir / "assets" / ".gitkeep").is_file()
        assert parse_manifest(skill_dir / "SKILL.md").frontmatter.license == "MIT"

    @pytest.mark.parametrize("template", TEMPLATES)
    @pytest.mark.parametrize("lang", ["python", "bash", "javascript", "typescript"])
    def test_output_is_clean(self, temp_dir, template, lang):
        """Test every template passes lint and is already formatted."""
        ctx = TemplateContext(name="fresh-skill", description="A freshly generated skill.", lang=lang)
        skill_dir = render_skill(template, ctx, temp_dir)
        manifest = parse_manifest(skill_dir / "SKILL.md")

        assert Validator().validate(manifest).is_ok_strict
        assert not Formatter().format_file(skill_dir / "SKILL.md").changed

    def test_existing_directory(self, temp_dir):
        """Test rendering into an existing skill directory fails."""
        (temp_dir / "taken").mkdir()
        with pytest.raises(SkillExistsError):
            render_skill("minimal", TemplateContext(name="taken", description="x"), temp_dir)

    def test_unknown_template(self, temp_dir):
        """Test an unknown template name."""
        with pytest.raises(ValueError, match="Unknown template"):
            render_skill("fancy", TemplateContext(name="x", description="x"), temp_dir)

    def test_unknown_language(self, temp_dir):
        """Test an unknown script language."""
        with pytest.raises(ValueError, match="Unknown language"):
            render_skill("minimal", TemplateContext(name="x", description="x", lang="cobol"), temp_dir)
