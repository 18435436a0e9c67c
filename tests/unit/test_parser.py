"""
Unit tests for SKILL.md parsing and skill discovery.
"""

import os
import warnings
from pathlib import Path

import pytest

from skilo.skills import (
    Frontmatter,
    InvalidYamlError,
    ManifestError,
    ManifestIOError,
    MissingFrontmatterError,
    UnclosedFrontmatterError,
    compile_ignore,
    count_lines,
    discover,
    find_skills,
    parse_frontmatter,
    parse_manifest,
    split_content,
)

# =============================================================================
# Splitting
# =============================================================================


class TestSplitContent:
    """Tests for frontmatter/body splitting."""

    def test_basic(self):
        """Test splitting and the body start line."""
        frontmatter, body, start = split_content("---\nname: x\ndescription: y\n---\n\n# T")
        assert frontmatter == "name: x\ndescription: y"
        assert body == "# T"
        assert start == 5

    def test_leading_whitespace(self):
        """Test leading blank lines are ignored."""
        frontmatter, _, start = split_content("\n\n---\nname: x\n---\nbody\n")
        assert frontmatter == "name: x"
        assert start == 4

    def test_empty_body(self):
        """Test a manifest with nothing after the closing marker."""
        _, body, _ = split_content("---\nname: x\n---\n")
        assert body == ""

    def test_missing_frontmatter(self):
        """Test content without an opening marker."""
        with pytest.raises(MissingFrontmatterError):
            split_content("# Just markdown\n")

    def test_unclosed_frontmatter(self):
        """Test content without a closing marker."""
        with pytest.raises(UnclosedFrontmatterError):
            split_content("---\nname: x\ndescription: y\n")


class TestCountLines:
    """Tests for line counting."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("", 0), ("one", 1), ("one\n", 1), ("one\ntwo", 2), ("one\ntwo\n", 2), ("\n", 1)],
    )
    def test_count(self, text, expected):
        """Test that a trailing newline does not add a line."""
        assert count_lines(text) == expected


# =============================================================================
# Frontmatter
# =============================================================================


class TestParseFrontmatter:
    """Tests for frontmatter decoding."""

    def test_all_fields(self):
        """Test every known field."""
        frontmatter = parse_frontmatter(
            "name: pdf-tools\n"
            "description: Work with PDFs\n"
            "license: MIT\n"
            "compatibility: Requires poppler\n"
            "metadata:\n  author: acme\n  version: 1.0\n"
            "allowed-tools: Bash Read\n"
        )
        assert frontmatter.name == "pdf-tools"
        assert frontmatter.license == "MIT"
        assert frontmatter.compatibility == "Requires poppler"
        assert frontmatter.metadata == {"author": "acme", "version": "1.0"}
        assert frontmatter.allowed_tools == "Bash Read"

    def test_unknown_keys_are_kept(self):
        """Test that unknown keys survive parsing."""
        frontmatter = parse_frontmatter("name: x\ndescription: y\ncustom: value\n")
        assert frontmatter.to_dict()["custom"] == "value"

    def test_empty_description_parses(self):
        """Test that an empty description is left to validation."""
        assert parse_frontmatter('name: x\ndescription: ""').description == ""

    def test_missing_description(self):
        """Test that a missing required field is a YAML error."""
        with pytest.raises(InvalidYamlError, match="description"):
            parse_frontmatter("name: x")

    def test_malformed_yaml(self):
        """Test that broken YAML is reported."""
        with pytest.raises(InvalidYamlError) as exc_info:
            parse_frontmatter("name: [unclosed\ndescription: y")
        assert exc_info.value.message.startswith("Invalid YAML in frontmatter:")

    def test_not_a_mapping(self):
        """Test that a scalar document is rejected."""
        with pytest.raises(InvalidYamlError, match="mapping"):
            parse_frontmatter("just a string")

    def test_to_dict_order(self):
        """Test canonical key order with unknown keys last."""
        frontmatter = Frontmatter.model_validate(
            {"custom": 1, "license": "MIT", "description": "d", "name": "n"}
        )
        assert list(frontmatter.to_dict()) == ["name", "description", "license", "custom"]


# =============================================================================
# Manifest Files
# =============================================================================


class TestParseManifest:
    """Tests for parsing SKILL.md files from disk."""

    def test_parse(self, make_skill, sample_skill_md):
        """Test parsing a well-formed file."""
        skill_dir = make_skill("test-skill", content=sample_skill_md)
        manifest = parse_manifest(skill_dir / "SKILL.md")

        assert manifest.name == "test-skill"
        assert manifest.description == "A test skill for unit tests"
        assert manifest.skill_dir == skill_dir
        assert manifest.body.startswith("# Test Skill")
        assert manifest.body_start_line == 6

    def test_error_carries_path(self, make_skill):
        """Test parse errors report the file they came from."""
        skill_dir = make_skill("broken", content="no frontmatter here\n")
        path = skill_dir / "SKILL.md"

        with pytest.raises(MissingFrontmatterError) as exc_info:
            parse_manifest(path)

        assert exc_info.value.path == path
        assert str(exc_info.value) == f"Missing frontmatter: SKILL.md must start with '---' (at {path})"

    def test_unreadable(self, temp_dir):
        """Test a missing file is an IO error."""
        with pytest.raises(ManifestIOError):
            parse_manifest(temp_dir / "missing" / "SKILL.md")

    def test_errors_share_base(self):
        """Test every parse error is a ManifestError."""
        for error in (MissingFrontmatterError(), UnclosedFrontmatterError(), InvalidYamlError("x")):
            assert isinstance(error, ManifestError)


# =============================================================================
# Discovery
# =============================================================================


class TestFindSkills:
    """Tests for locating SKILL.md files."""

    def test_file_root(self, make_skill):
        """Test passing a SKILL.md file directly."""
        path = make_skill("one") / "SKILL.md"
        assert find_skills(path) == [path]

    def test_other_file_root(self, temp_dir):
        """Test a non-SKILL.md file yields nothing."""
        other = temp_dir / "README.md"
        other.write_text("# readme", encoding="utf-8")
        assert find_skills(other) == []

    def test_direct_skill_directory(self, make_skill):
        """Test a directory containing SKILL.md returns only that file."""
        skill_dir = make_skill("outer")
        make_skill("nested", parent=skill_dir)
        assert find_skills(skill_dir) == [skill_dir / "SKILL.md"]

    def test_recursive(self, temp_dir, make_skill):
        """Test recursive discovery."""
        make_skill("alpha", parent=temp_dir / "skills")
        make_skill("beta", parent=temp_dir / "more" / "deep")

        found = sorted(find_skills(temp_dir))

        assert found == sorted(
            [temp_dir / "skills" / "alpha" / "SKILL.md", temp_dir / "more" / "deep" / "beta" / "SKILL.md"]
        )

    def test_missing_root(self, temp_dir):
        """Test a path that does not exist."""
        assert find_skills(temp_dir / "nope") == []

    def test_ignore_by_name(self, temp_dir, make_skill):
        """Test a bare name prunes every directory with that name."""
        make_skill("kept", parent=temp_dir / "skills")
        make_skill("dropped", parent=temp_dir / "node_modules")
        make_skill("dropped-too", parent=temp_dir / "sub" / "node_modules")

        found = find_skills(temp_dir, ["node_modules"])

        assert found == [temp_dir / "skills" / "kept" / "SKILL.md"]

    def test_ignore_by_relative_path(self, temp_dir, make_skill):
        """Test a path pattern prunes only the matching path."""
        make_skill("debug-skill", parent=temp_dir / "target" / "debug")
        make_skill("release-skill", parent=temp_dir / "target" / "release")

        found = find_skills(temp_dir, ["target/debug"])

        assert found == [temp_dir / "target" / "release" / "release-skill" / "SKILL.md"]

    def test_ignore_glob(self, temp_dir, make_skill):
        """Test glob patterns."""
        make_skill("a", parent=temp_dir / "build-1")
        make_skill("b", parent=temp_dir / "src")

        assert find_skills(temp_dir, ["build-*"]) == [temp_dir / "src" / "b" / "SKILL.md"]

    def test_blank_patterns_ignored(self, temp_dir, make_skill):
        """Test that empty patterns do not prune anything."""
        make_skill("a", parent=temp_dir / "src")
        assert len(find_skills(temp_dir, ["", "   "])) == 1

    def test_ignore_double_star(self, temp_dir, make_skill):
        """Test a **/ pattern prunes the directory at any depth."""
        make_skill("x", parent=temp_dir / "a" / "baz")
        make_skill("y", parent=temp_dir / "b" / "c" / "baz")
        make_skill("z", parent=temp_dir / "a" / "keep")

        found = find_skills(temp_dir, ["**/baz"])

        assert found == [temp_dir / "a" / "keep" / "z" / "SKILL.md"]

    def test_compile_ignore_without_deprecation(self):
        """Test compiling patterns emits no deprecation warnings."""
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            spec = compile_ignore(["**/baz", "node_modules", "target/debug"])

        assert spec is not None
        assert spec.match_file("a/b/baz")

    def test_repeatable(self, temp_dir, make_skill):
        """Test repeated discovery over the same tree gives the same result."""
        make_skill("alpha", parent=temp_dir / "skills")
        make_skill("beta", parent=temp_dir / "more" / "deep")
        make_skill("gamma", parent=temp_dir / "node_modules")

        first = find_skills(temp_dir, ["node_modules"])
        second = find_skills(temp_dir, ["node_modules"])

        assert first == second
        assert len(first) == 2

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_follows_symlinks(self, temp_dir, make_skill):
        """Test symlinked directories are followed."""
        outside = temp_dir / "outside"
        make_skill("linked", parent=outside)
        root = temp_dir / "root"
        root.mkdir()
        (root / "link").symlink_to(outside, target_is_directory=True)

        assert find_skills(root) == [root / "link" / "linked" / "SKILL.md"]

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_symlink_cycle(self, temp_dir, make_skill):
        """Test a symlink loop terminates."""
        make_skill("a", parent=temp_dir / "root")
        (temp_dir / "root" / "loop").symlink_to(temp_dir / "root", target_is_directory=True)

        assert find_skills(temp_dir / "root") == [temp_dir / "root" / "a" / "SKILL.md"]


class TestDiscover:
    """Tests for discover()."""

    def test_sorted_with_failures(self, temp_dir, make_skill):
        """Test results are sorted and failures do not stop the batch."""
        make_skill("zeta", parent=temp_dir)
        make_skill("alpha", parent=temp_dir, content="not a manifest\n")

        results = discover(temp_dir)

        assert [result.path.parent.name for result in results] == ["alpha", "zeta"]
        assert results[0].ok is False
        assert isinstance(results[0].error, MissingFrontmatterError)
        assert results[1].ok is True
        assert results[1].manifest.name == "zeta"

    def test_empty(self, temp_dir):
        """Test a directory without skills."""
        assert discover(temp_dir) == []


# =============================================================================
# Round Trip
# =============================================================================


class TestFrontmatterRoundTrip:
    """Tests for serializing frontmatter and parsing it back."""

    @pytest.mark.parametrize(
        "frontmatter",
        [
            Frontmatter(name="my-skill", description="A skill"),
            Frontmatter(name="my-skill", description="yes", license="- MIT"),
            Frontmatter(name="my-skill", description="line one\n---\nline two"),
            Frontmatter(name="", description=""),
            Frontmatter(name="my-skill", description="  padded  ", compatibility="~"),
            Frontmatter(
                name="pdf-tools",
                description="Work with PDF files: split, merge & extract.",
                license="Apache-2.0",
                compatibility="Requires python3 and poppler",
                metadata={"author": "acme", "version": "1.0"},
                allowed_tools="Bash(git:*) Read",
            ),
        ],
    )
    def test_round_trip(self, frontmatter):
        """Test to_yaml() output parses back to an equal model."""
        content = f"---\n{frontmatter.to_yaml()}---\n\n# Body\n"

        raw, body, _ = split_content(content)

        assert parse_frontmatter(raw) == frontmatter
        assert body == "# Body\n"



def test_manifest_render(temp_dir: Path) -> None:
    """Test render() reassembles the original frontmatter text."""
    path = temp_dir / "x" / "SKILL.md"
    path.parent.mkdir()
    path.write_text("---\nname: x\ndescription: y\n---\n\nBody\n", encoding="utf-8")
    assert parse_manifest(path).render() == "---\nname: x\ndescription: y\n---\n\nBody\n"
