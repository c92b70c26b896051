"""Configuration management."""

from changecue.config.loader import load_config
from changecue.config.rules import load_rule_set, parse_rule_set
from changecue.config.settings import OutputFormat, Settings

__all__ = ["OutputFormat", "Settings", "load_config", "load_rule_set", "parse_rule_set"]
