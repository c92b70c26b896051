"""Tests for configuration and rule set loading."""

from pathlib import Path

import pytest
from changecue.config.loader import _parse_config, load_config
from changecue.config.rules import load_rule_set, parse_rule_set
from changecue.config.settings import DEFAULT_RULES_PATH, OutputFormat, Settings
from changecue.errors import ConfigError


class TestSettings:
  def test_default_settings(self) -> None:
    settings = Settings()
    assert settings.rules_path == DEFAULT_RULES_PATH
    assert settings.base == "main"
    assert settings.format == OutputFormat.TERMINAL
    assert settings.fail_on_empty is False

  def test_custom_settings(self) -> None:
    settings = Settings(rules_path=Path("rules.yml"), base="develop", format=OutputFormat.JSON)
    assert settings.rules_path == Path("rules.yml")
    assert settings.base == "develop"
    assert settings.format == OutputFormat.JSON


class TestConfigLoader:
  def test_load_default_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert load_config() == Settings()

  def test_load_from_file(self, tmp_path: Path) -> None:
    config_file = tmp_path / "changecue.yaml"
    config_file.write_text("""
rules_path: ci/rules.yml
base: develop
format: json
fail_on_empty: true
""")
    settings = load_config(config_file)
    assert settings.rules_path == Path("ci/rules.yml")
    assert settings.base == "develop"
    assert settings.format == OutputFormat.JSON
    assert settings.fail_on_empty is True

  def test_discovers_file_in_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".changecue.yml").write_text("base: trunk\n")
    monkeypatch.chdir(tmp_path)
    assert load_config().base == "trunk"

  def test_missing_explicit_file(self, tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
      load_config(tmp_path / "nope.yaml")

  def test_parse_config_rejects_unknown_keys(self) -> None:
    with pytest.raises(ConfigError):
      _parse_config({"provider": "gemini"})

  def test_parse_config_rejects_unknown_format(self) -> None:
    with pytest.raises(ConfigError):
      _parse_config({"format": "xml"})


class TestParseRuleSet:
  def test_structured_entries(self) -> None:
    rule_set = parse_rule_set({
      "matchers": {
        "backend": [{"all": ["src/**", "!src/ui/**"], "any": ["**/*.py"]}],
      },
      "commands": {"backend": "make test"},
    })
    (cond,) = rule_set.matchers["backend"]
    assert [p.describe() for p in cond.all] == ["src/**", "!src/ui/**"]
    assert [p.describe() for p in cond.any] == ["**/*.py"]
    assert rule_set.commands == {"backend": "make test"}

  def test_absent_clause_stays_none(self) -> None:
    rule_set = parse_rule_set({"matchers": {"a": [{"any": ["**"]}, {}]}})
    first, second = rule_set.matchers["a"]
    assert first.all is None
    assert second.is_empty

  def test_plain_pattern_list(self) -> None:
    rule_set = parse_rule_set({"matchers": {"docs": ["docs/**", "**/*.md"]}})
    conditions = rule_set.matchers["docs"]
    assert len(conditions) == 2
    assert all(c.all is None for c in conditions)
    assert [c.any[0].describe() for c in conditions] == ["docs/**", "**/*.md"]

  def test_single_string_shorthand(self) -> None:
    rule_set = parse_rule_set({"matchers": {"docs": "docs/**"}})
    (cond,) = rule_set.matchers["docs"]
    assert cond.any[0].describe() == "docs/**"

  def test_single_mapping_shorthand(self) -> None:
    rule_set = parse_rule_set({"matchers": {"docs": {"all": ["docs/**"]}}})
    (cond,) = rule_set.matchers["docs"]
    assert cond.all[0].describe() == "docs/**"
    assert cond.any is None

  def test_empty_list(self) -> None:
    rule_set = parse_rule_set({"matchers": {"never": []}})
    assert rule_set.matchers["never"] == ()

  def test_empty_document(self) -> None:
    rule_set = parse_rule_set(None)
    assert dict(rule_set.matchers) == {}
    assert dict(rule_set.commands) == {}

  def test_preserves_label_order(self) -> None:
    rule_set = parse_rule_set({"commands": {"z": "1", "a": "2", "m": "3"}})
    assert rule_set.labels == ["z", "a", "m"]

  def test_rule_set_is_read_only(self) -> None:
    rule_set = parse_rule_set({"commands": {"a": "make a"}})
    with pytest.raises(TypeError):
      rule_set.commands["b"] = "make b"  # type: ignore[index]

  def test_missing_matcher_is_not_a_load_error(self) -> None:
    rule_set = parse_rule_set({"commands": {"a": "make a"}})
    assert "a" not in rule_set.matchers

  @pytest.mark.parametrize(
    "data",
    [
      ["not", "a", "mapping"],
      {"matchers": {"a": 42}},
      {"matchers": {"a": [42]}},
      {"matchers": {"a": [{"all": "src/**"}]}},
      {"matchers": {"a": [{"some": ["src/**"]}]}},
      {"matchers": {"a": [{"any": [1, 2]}]}},
      {"commands": {"a": ["make", "a"]}},
      {"commands": {"a": 42}},
      {"labels": {}},
    ],
  )
  def test_rejects_malformed_shapes(self, data: object) -> None:
    with pytest.raises(ConfigError):
      parse_rule_set(data)

  def test_rejects_invalid_glob(self) -> None:
    with pytest.raises(ConfigError) as exc_info:
      parse_rule_set({"matchers": {"bad": [{"any": ["!"]}]}})
    assert exc_info.value.label == "bad"
    assert "Label 'bad'" in str(exc_info.value)

  def test_rejects_glob_refused_by_compiler(self) -> None:
    with pytest.raises(ConfigError) as exc_info:
      parse_rule_set({"matchers": {"huge": [{"all": ["src/**", "{1..200000}"]}]}})
    assert exc_info.value.label == "huge"
    assert "Invalid glob pattern" in str(exc_info.value)


class TestLoadRuleSet:
  def test_load_from_file(self, tmp_path: Path, sample_rules_yaml: str) -> None:
    rules_file = tmp_path / "rules.yml"
    rules_file.write_text(sample_rules_yaml)
    rule_set = load_rule_set(rules_file)
    assert rule_set.labels == ["ts", "docs", "python"]
    assert len(rule_set.matchers["docs"]) == 2

  def test_missing_file(self, tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as exc_info:
      load_rule_set(tmp_path / "missing.yml")
    assert exc_info.value.source == tmp_path / "missing.yml"

  def test_invalid_yaml(self, tmp_path: Path) -> None:
    rules_file = tmp_path / "rules.yml"
    rules_file.write_text("matchers: [unclosed\n")
    with pytest.raises(ConfigError):
      load_rule_set(rules_file)
