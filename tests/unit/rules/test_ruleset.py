"""Tests for the RuleSet model and override loading."""

from pathlib import Path

import pytest
from azsnaffler.rules import defaults
from azsnaffler.rules.ruleset import (
    RuleSet,
    RuleSetError,
    RuleSetParseError,
    load_ruleset,
)
from pydantic import ValidationError


class TestRuleSet:
    """Tests for the RuleSet model."""

    def test_defaults(self) -> None:
        """A bare RuleSet carries the bundled tables."""
        rules = RuleSet()
        assert rules.excluded_directory_names == defaults.EXCLUDED_DIRECTORY_NAMES
        assert rules.interesting_path_suffixes == defaults.INTERESTING_PATH_SUFFIXES

    def test_frozen(self) -> None:
        """Tables cannot be reassigned."""
        rules = RuleSet()
        with pytest.raises(ValidationError):
            rules.interesting_extensions = (".x",)  # type: ignore[misc]

    def test_unknown_table_rejected(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            RuleSet.model_validate({"interesting_things": ["x"]})

    def test_blank_tokens_dropped(self) -> None:
        """Empty and whitespace tokens are removed, others are stripped."""
        rules = RuleSet(interesting_extensions=("", " .pem ", "   ", ".key"))
        assert rules.interesting_extensions == (".pem", ".key")

    def test_upper_view(self) -> None:
        """The upper view mirrors every table upper-cased."""
        rules = RuleSet(excluded_directory_names=("ipc$",), interesting_extensions=(".Pem",))
        assert rules.upper.excluded_directory_names == frozenset({"IPC$"})
        assert rules.upper.interesting_extensions == (".PEM",)

    def test_upper_view_cached(self) -> None:
        """The upper view is computed once."""
        rules = RuleSet()
        assert rules.upper is rules.upper

    def test_tables(self) -> None:
        """tables() lists all seven tables in declaration order."""
        tables = RuleSet().tables()
        assert list(tables) == [
            "excluded_directory_names",
            "interesting_directory_names",
            "excluded_extensions",
            "excluded_path_suffixes",
            "interesting_filename_substrings",
            "interesting_extensions",
            "interesting_path_suffixes",
        ]


class TestLoadRuleset:
    """Tests for load_ruleset."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing override file gives the defaults."""
        assert load_ruleset(tmp_path / "absent.toml") == RuleSet()

    def test_partial_override(self, tmp_path: Path) -> None:
        """Only the tables named in the file are replaced."""
        path = tmp_path / "rules.toml"
        path.write_text('[rules]\nexcluded_directory_names = ["IPC$", "NETLOGON"]\n')

        rules = load_ruleset(path)

        assert rules.excluded_directory_names == ("IPC$", "NETLOGON")
        assert rules.interesting_extensions == defaults.INTERESTING_EXTENSIONS

    def test_file_without_rules_table(self, tmp_path: Path) -> None:
        """A file with no [rules] table gives the defaults."""
        path = tmp_path / "rules.toml"
        path.write_text('title = "nothing"\n')
        assert load_ruleset(path) == RuleSet()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises RuleSetParseError."""
        path = tmp_path / "rules.toml"
        path.write_text("[rules\n")
        with pytest.raises(RuleSetParseError, match="Invalid TOML"):
            load_ruleset(path)

    def test_rules_not_a_table(self, tmp_path: Path) -> None:
        """A scalar 'rules' key is rejected."""
        path = tmp_path / "rules.toml"
        path.write_text('rules = "all"\n')
        with pytest.raises(RuleSetError, match="must be a table"):
            load_ruleset(path)

    def test_wrong_type(self, tmp_path: Path) -> None:
        """A table that is not a list of strings is rejected."""
        path = tmp_path / "rules.toml"
        path.write_text("[rules]\ninteresting_extensions = 5\n")
        with pytest.raises(RuleSetError, match="Invalid rule overrides"):
            load_ruleset(path)

    def test_default_location(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a path the file under XDG_CONFIG_HOME is used."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        rules_dir = tmp_path / "azsnaffler"
        rules_dir.mkdir()
        (rules_dir / "rules.toml").write_text('[rules]\ninteresting_extensions = [".pem"]\n')

        assert load_ruleset().interesting_extensions == (".pem",)

    def test_each_load_is_independent(self, tmp_path: Path) -> None:
        """Loading never reuses an earlier rule set; callers inject what they load."""
        path = tmp_path / "rules.toml"
        path.write_text('[rules]\ninteresting_extensions = [".pem"]\n')
        first = load_ruleset(path)

        path.write_text('[rules]\ninteresting_extensions = [".key"]\n')
        second = load_ruleset(path)

        assert first.interesting_extensions == (".pem",)
        assert second.interesting_extensions == (".key",)
