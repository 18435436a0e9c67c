"""
Unit tests for the rule-based SKILL.md validator.
"""

import os
from pathlib import Path

import pytest

from skilo.config import LintConfig, RulesConfig, Threshold
from skilo.skills import (
    Diagnostic,
    DiagnosticCode,
    Manifest,
    MissingFrontmatterError,
    ValidationResult,
    Validator,
    parse_failure_result,
    parse_manifest,
)
from skilo.skills.rules import (
    BodyLengthRule,
    CompatibilityLengthRule,
    DescriptionLengthRule,
    NameLengthRule,
    is_valid_name,
)


def manifest_text(name: str = "my-skill", description: str = "Does things.", extra: str = "", body: str = "# Body\n") -> str:
    return f"---\nname: {name}\ndescription: {description}\n{extra}---\n\n{body}"


@pytest.fixture
def load(make_skill):
    """Write a skill and return its parsed manifest."""

    def factory(dir_name: str = "my-skill", **kwargs) -> Manifest:
        skill_dir = make_skill(dir_name, content=manifest_text(**kwargs))
        return parse_manifest(skill_dir / "SKILL.md")

    return factory


def codes(result: ValidationResult) -> list[str]:
    return [d.code.value for d in [*result.errors, *result.warnings]]


# =============================================================================
# Name Rules
# =============================================================================


class TestNameRules:
    """Tests for E001-E003."""

    @pytest.mark.parametrize("name", ["a", "pdf-tools", "v2", "abc-123-def"])
    def test_valid_names(self, name):
        """Test accepted names."""
        assert is_valid_name(name)

    @pytest.mark.parametrize("name", ["", "Pdf", "pdf--tools", "-pdf", "pdf-", "pdf_tools", "pdf tools"])
    def test_invalid_names(self, name):
        """Test rejected names."""
        assert not is_valid_name(name)

    def test_valid_skill(self, load):
        """Test a clean skill has no findings."""
        result = Validator().validate(load())
        assert result.is_ok_strict

    def test_invalid_format(self, load):
        """Test E001 with its location and hint."""
        result = Validator().validate(load(dir_name="My_Skill", name="My_Skill"))

        [error] = result.errors
        assert error.code == DiagnosticCode.INVALID_NAME_FORMAT
        assert error.message == "Invalid name 'My_Skill': must be lowercase alphanumeric with single hyphens"
        assert (error.line, error.column) == (2, 7)
        assert error.fix_hint

    def test_name_too_long(self, load):
        """Test E002 at the default limit."""
        name = "a" * 65
        result = Validator().validate(load(dir_name=name, name=name))
        assert codes(result) == ["E002"]
        assert result.errors[0].message == "Name too long (65 chars, max 64)"

    def test_name_at_limit(self, load):
        """Test a name exactly at the limit passes."""
        name = "a" * 64
        assert Validator().validate(load(dir_name=name, name=name)).is_ok

    def test_name_directory_mismatch(self, load):
        """Test E003."""
        result = Validator().validate(load(dir_name="other-dir", name="my-skill"))
        assert codes(result) == ["E003"]
        assert result.errors[0].message == "Name 'my-skill' does not match directory name 'other-dir'"

    def test_relative_path_uses_absolute_parent(self, load, monkeypatch):
        """Test the directory check works for a bare relative SKILL.md path."""
        manifest = load()
        monkeypatch.chdir(manifest.skill_dir)
        relative = manifest.model_copy(update={"path": Path("SKILL.md")})
        assert Validator().validate(relative).is_ok


# =============================================================================
# Description and Compatibility Rules
# =============================================================================


class TestDescriptionRules:
    """Tests for E004-E006."""

    def test_empty_description(self, load):
        """Test E004."""
        result = Validator().validate(load(description='""'))
        [error] = result.errors
        assert error.code == DiagnosticCode.MISSING_DESCRIPTION
        assert error.message == "Description cannot be empty"
        assert (error.line, error.column) == (3, 14)

    def test_description_too_long(self, load):
        """Test E005 one past the limit."""
        result = Validator().validate(load(description="x" * 1025))
        assert codes(result) == ["E005"]
        assert "1025 chars, max 1024" in result.errors[0].message

    def test_description_at_limit(self, load):
        """Test a description exactly at the limit passes."""
        assert Validator().validate(load(description="x" * 1024)).is_ok

    def test_compatibility_too_long(self, load):
        """Test E006."""
        result = Validator().validate(load(extra=f"compatibility: {'c' * 501}\n"))
        assert codes(result) == ["E006"]
        assert result.errors[0].message == "Compatibility too long (501 chars, max 500)"

    def test_compatibility_absent(self, load):
        """Test a manifest without compatibility."""
        assert CompatibilityLengthRule().check(load()) == []

    def test_lengths_count_characters(self, load):
        """Test multibyte text is measured in characters."""
        manifest = load(description="é" * 10)
        assert DescriptionLengthRule(10).check(manifest) == []
        assert len(DescriptionLengthRule(9).check(manifest)) == 1


# =============================================================================
# Body and File Rules
# =============================================================================


class TestBodyLength:
    """Tests for W001."""

    def test_at_limit(self, load):
        """Test a body exactly at the limit."""
        manifest = load(body="line\n" * 10)
        assert BodyLengthRule(10).check(manifest) == []

    def test_over_limit(self, load):
        """Test the warning points at the first line past the limit."""
        manifest = load(body="line\n" * 11)

        [warning] = BodyLengthRule(10).check(manifest)

        assert warning.code == DiagnosticCode.BODY_TOO_LONG
        assert warning.line == manifest.body_start_line + 10
        assert "(11 lines)" in warning.message

    def test_warning_not_error(self, load):
        """Test W001 lands in warnings."""
        config = LintConfig(rules=RulesConfig(body_length=Threshold.of(1)))
        result = Validator(config).validate(load(body="a\nb\nc\n"))
        assert result.is_ok
        assert not result.is_ok_strict
        assert codes(result) == ["W001"]


class TestReferences:
    """Tests for E009."""

    def test_missing_reference(self, load):
        """Test a backtick reference to a missing file."""
        result = Validator().validate(load(body="See `references/GUIDE.md` and `scripts/run.sh`.\n"))
        messages = [error.message for error in result.errors]
        assert messages == [
            "Referenced file not found: references/GUIDE.md",
            "Referenced file not found: scripts/run.sh",
        ]

    def test_existing_reference(self, load):
        """Test references that exist."""
        manifest = load(body="See `references/GUIDE.md`.\n")
        (manifest.skill_dir / "references").mkdir()
        (manifest.skill_dir / "references" / "GUIDE.md").write_text("# Guide", encoding="utf-8")
        assert Validator().validate(manifest).is_ok

    def test_unquoted_paths_ignored(self, load):
        """Test that only backtick-quoted paths count."""
        assert Validator().validate(load(body="See references/GUIDE.md and `other/file.md`.\n")).is_ok


@pytest.mark.skipif(os.name == "nt", reason="no execute bits on Windows")
class TestScripts:
    """Tests for W002 and W003."""

    def write_script(self, manifest: Manifest, name: str, content: str, mode: int) -> Path:
        scripts = manifest.skill_dir / "scripts"
        scripts.mkdir(exist_ok=True)
        script = scripts / name
        script.write_text(content, encoding="utf-8")
        script.chmod(mode)
        return script

    def test_good_script(self, load):
        """Test an executable script with a shebang."""
        manifest = load()
        self.write_script(manifest, "run.sh", "#!/usr/bin/env bash\necho hi\n", 0o755)
        assert Validator().validate(manifest).is_ok_strict

    def test_not_executable(self, load):
        """Test W002 points at the script."""
        manifest = load()
        script = self.write_script(manifest, "run.sh", "#!/usr/bin/env bash\n", 0o644)

        result = Validator().validate(manifest)

        [warning] = result.warnings
        assert warning.code == DiagnosticCode.SCRIPT_NOT_EXECUTABLE
        assert warning.path == script
        assert warning.message == "Script is not executable"

    def test_missing_shebang(self, load):
        """Test W003 at line 1, column 1."""
        manifest = load()
        script = self.write_script(manifest, "run.py", "print('hi')\n", 0o755)

        [warning] = Validator().validate(manifest).warnings

        assert warning.code == DiagnosticCode.SCRIPT_MISSING_SHEBANG
        assert warning.path == script
        assert (warning.line, warning.column) == (1, 1)

    def test_empty_script(self, load):
        """Test an empty script has no shebang."""
        manifest = load()
        self.write_script(manifest, "empty.sh", "", 0o755)
        assert codes(Validator().validate(manifest)) == ["W003"]

    def test_subdirectories_ignored(self, load):
        """Test only files directly in scripts/ are checked."""
        manifest = load()
        nested = manifest.skill_dir / "scripts" / "lib"
        nested.mkdir(parents=True)
        (nested / "helper.py").write_text("x = 1\n", encoding="utf-8")
        assert Validator().validate(manifest).is_ok_strict


# =============================================================================
# Configuration
# =============================================================================


class TestValidatorConfig:
    """Tests for rule selection from LintConfig."""

    def test_default_rule_order(self):
        """Test registration order of the default rule set."""
        assert Validator().rule_names == [
            "name-format",
            "name-length",
            "name-directory",
            "description-required",
            "description-length",
            "compatibility-length",
            "references-exist",
            "body-length",
            "script-executable",
            "script-shebang",
        ]

    def test_disabled_rules(self):
        """Test that false flags and thresholds drop rules."""
        config = LintConfig(
            rules=RulesConfig(
                name_directory=False,
                body_length=Threshold.disabled(),
                script_shebang=False,
            )
        )
        names = Validator(config).rule_names
        assert "name-directory" not in names
        assert "body-length" not in names
        assert "script-shebang" not in names
        assert len(names) == 7

    def test_custom_threshold(self, load):
        """Test a custom name length limit."""
        config = LintConfig(rules=RulesConfig(name_length=Threshold.of(3)))
        validator = Validator(config)
        [rule] = [rule for rule in validator.rules if isinstance(rule, NameLengthRule)]
        assert rule.max_length == 3
        assert codes(validator.validate(load())) == ["E002"]

    def test_disabled_mismatch(self, load):
        """Test a disabled rule reports nothing."""
        config = LintConfig(rules=RulesConfig(name_directory=False))
        assert Validator(config).validate(load(dir_name="elsewhere")).is_ok

    def test_errors_and_warnings_accumulate(self, load):
        """Test several findings from several rules in one result."""
        config = LintConfig(rules=RulesConfig(body_length=Threshold.of(0)))
        result = Validator(config).validate(load(dir_name="Bad_Dir", name="Bad_Dir", description='""'))
        assert codes(result) == ["E001", "E004", "W001"]


class TestParseFailure:
    """Tests for reporting unparseable manifests."""

    def test_parse_failure_result(self, temp_dir):
        """Test a parse failure becomes a single E007 error."""
        path = temp_dir / "broken" / "SKILL.md"
        result = parse_failure_result(MissingFrontmatterError(path))

        [error] = result.errors
        assert error.code == DiagnosticCode.INVALID_YAML
        assert error.path == path
        assert error.line == 1
        assert error.message == "Missing frontmatter: SKILL.md must start with '---'"
        assert result.warnings == []

    def test_codes(self):
        """Test code severities and descriptions."""
        assert DiagnosticCode.INVALID_YAML.is_error
        assert not DiagnosticCode.BODY_TOO_LONG.is_error
        assert str(DiagnosticCode.EMPTY_OPTIONAL_DIR) == "W004"
        assert DiagnosticCode.REFERENCE_NOT_FOUND.description == "Referenced file not found"


class TestValidationResultMerge:
    """Tests for combining validation results."""

    @staticmethod
    def result(*diagnostic_codes: DiagnosticCode) -> ValidationResult:
        result = ValidationResult()
        for index, code in enumerate(diagnostic_codes):
            result.add(Diagnostic(path=Path(f"skill-{index}/SKILL.md"), code=code, message=code.description))
        return result

    def test_preserves_order(self):
        """Test errors and warnings keep their order across results."""
        first = self.result(DiagnosticCode.NAME_TOO_LONG, DiagnosticCode.BODY_TOO_LONG)
        second = self.result(DiagnosticCode.INVALID_YAML, DiagnosticCode.SCRIPT_NOT_EXECUTABLE)

        merged = first.merge(second)

        assert codes(merged) == ["E002", "E007", "W001", "W002"]
        assert merged.errors == [*first.errors, *second.errors]
        assert merged.warnings == [*first.warnings, *second.warnings]

    def test_associative(self):
        """Test grouping does not change the merged result."""
        a = self.result(DiagnosticCode.INVALID_NAME_FORMAT, DiagnosticCode.EMPTY_OPTIONAL_DIR)
        b = self.result(DiagnosticCode.BODY_TOO_LONG)
        c = self.result(DiagnosticCode.REFERENCE_NOT_FOUND, DiagnosticCode.MISSING_DESCRIPTION)

        assert a.merge(b).merge(c) == a.merge(b.merge(c))

    def test_empty_is_identity(self):
        """Test merging with an empty result changes nothing."""
        a = self.result(DiagnosticCode.INVALID_YAML, DiagnosticCode.BODY_TOO_LONG)

        assert a.merge(ValidationResult()) == a
        assert ValidationResult().merge(a) == a

    def test_inputs_untouched(self):
        """Test merge returns a new result."""
        a = self.result(DiagnosticCode.INVALID_YAML)
        b = self.result(DiagnosticCode.BODY_TOO_LONG)

        a.merge(b)

        assert codes(a) == ["E007"]
        assert codes(b) == ["W001"]
