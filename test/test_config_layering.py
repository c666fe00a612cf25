"""Tests for layered config parsing and validation."""

import sys
import tempfile
import unittest
from copy import deepcopy
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ZoteroPublications.config import load_config_with_defaults, parse_config_dict
from ZoteroPublications.config.app import merge_config_dicts


_BASE_YAML = """
log:
  level: INFO
  to_file: false
  dir: log

display:
  group: none
  expand: []
  show_branding: true
  shorten_abstract: 300
  template_dir: ""

output:
  base_dir: output
  document_template: document.html
  title: Publications
"""


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "display": {
            "group": "type",
            "expand": ["book"],
            "show_branding": True,
            "shorten_abstract": 300,
            "template_dir": "",
        },
        "output": {"base_dir": "output", "document_template": "document.html", "title": "Publications"},
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_full_config(self) -> None:
        cfg = parse_config_dict(_base_raw_config())

        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.display.group, "type")
        self.assertEqual(cfg.display.expand, ("book",))
        self.assertEqual(cfg.output.base_dir, "output")

    def test_optional_sections_use_defaults(self) -> None:
        cfg = parse_config_dict({"output": {"base_dir": "out"}})

        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertFalse(cfg.runtime.to_file)
        self.assertEqual(cfg.display.group, "none")
        self.assertEqual(cfg.display.expand, ())
        self.assertTrue(cfg.display.show_branding)
        self.assertEqual(cfg.output.document_template, "document.html")

    def test_expand_all_token(self) -> None:
        raw = _base_raw_config()
        raw["display"]["expand"] = "ALL"

        self.assertEqual(parse_config_dict(raw).display.expand, "all")

    def test_invalid_values_are_rejected(self) -> None:
        cases = [
            (("display", "group"), "collections", ValueError),
            (("display", "expand"), "book", ValueError),
            (("display", "expand"), [1], TypeError),
            (("display", "shorten_abstract"), -1, ValueError),
            (("display", "shorten_abstract"), True, TypeError),
            (("display", "show_branding"), "yes", TypeError),
            (("log", "level"), "LOUD", ValueError),
            (("output", "base_dir"), "  ", ValueError),
        ]
        for (section, key), value, error in cases:
            with self.subTest(key=f"{section}.{key}", value=value):
                raw = deepcopy(_base_raw_config())
                raw[section][key] = value
                with self.assertRaises(error):
                    parse_config_dict(raw)

    def test_expand_requires_grouping(self) -> None:
        raw = _base_raw_config()
        raw["display"]["group"] = "none"

        with self.assertRaises(ValueError):
            parse_config_dict(raw)

    def test_output_section_is_required(self) -> None:
        raw = _base_raw_config()
        del raw["output"]

        with self.assertRaises(ValueError):
            parse_config_dict(raw)

    def test_merge_is_deep(self) -> None:
        merged = merge_config_dicts(
            {"display": {"group": "none", "show_branding": True}},
            {"display": {"group": "type"}},
        )

        self.assertEqual(merged, {"display": {"group": "type", "show_branding": True}})


class TestConfigOverride(unittest.TestCase):
    def test_override_merges_with_defaults(self) -> None:
        override_yaml = """
log:
  level: DEBUG

display:
  group: type
  expand: all
"""
        with tempfile.TemporaryDirectory() as tmp:
            override_path = Path(tmp) / "override.yml"
            override_path.write_text(override_yaml, encoding="utf-8")

            cfg = load_config_with_defaults(override_path, _defaults_text=_BASE_YAML)

        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertEqual(cfg.display.group, "type")
        self.assertEqual(cfg.display.expand, "all")
        self.assertEqual(cfg.display.shorten_abstract, 300)
        self.assertEqual(cfg.output.title, "Publications")

    def test_empty_override_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            override_path = Path(tmp) / "override.yml"
            override_path.write_text("{}", encoding="utf-8")

            cfg = load_config_with_defaults(override_path, _defaults_text=_BASE_YAML)

        self.assertEqual(cfg.display.group, "none")
        self.assertEqual(cfg.output.base_dir, "output")

    def test_packaged_defaults_parse(self) -> None:
        cfg = load_config_with_defaults()

        self.assertEqual(cfg.display.group, "none")
        self.assertEqual(cfg.display.template_dir, "")
        self.assertEqual(cfg.output.document_template, "document.html")

    def test_non_mapping_root_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            override_path = Path(tmp) / "override.yml"
            override_path.write_text("- just\n- a list\n", encoding="utf-8")

            with self.assertRaises(ValueError):
                load_config_with_defaults(override_path, _defaults_text=_BASE_YAML)


if __name__ == "__main__":
    unittest.main()
