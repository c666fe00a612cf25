"""Tests for the CLI commands and the JSON record source."""

from __future__ import annotations

import json
import sys
import tempfile
import unittest
from dataclasses import replace
from pathlib import Path

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ZoteroPublications.cli import cli
from ZoteroPublications.cli.commands import SummaryCommand
from ZoteroPublications.config import load_config_with_defaults
from ZoteroPublications.sources.json_file import RecordSourceError, load_records


_ITEMS = [
    {"key": "AAAA1111", "data": {"itemType": "book", "title": "Structure and Interpretation"}},
    {"key": "BBBB2222", "data": {"itemType": "journalArticle", "title": "Go To Statement Considered Harmful"}},
    {"key": "CCCC3333", "data": {"itemType": "book", "title": "The Art of Computer Programming"}},
]


def _write_json(directory: Path, payload: object, name: str = "items.json") -> Path:
    path = directory / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _write_config(directory: Path, base_dir: Path, group: str = "none") -> Path:
    path = directory / "config.yml"
    path.write_text(
        f"display:\n  group: {group}\noutput:\n  base_dir: {base_dir.as_posix()}\n",
        encoding="utf-8",
    )
    return path


class TestLoadRecords(unittest.TestCase):
    def test_accepts_list_and_items_wrapper(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            as_list = _write_json(Path(tmp), _ITEMS, "list.json")
            wrapped = _write_json(Path(tmp), {"items": _ITEMS}, "wrapped.json")

            self.assertEqual([r["key"] for r in load_records(as_list)], ["AAAA1111", "BBBB2222", "CCCC3333"])
            self.assertEqual(load_records(wrapped), load_records(as_list))

    def test_rejects_bad_payloads(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            bad_json = Path(tmp) / "bad.json"
            bad_json.write_text("{not json", encoding="utf-8")
            for path in (
                bad_json,
                _write_json(Path(tmp), {"data": []}, "no_items.json"),
                _write_json(Path(tmp), [1, 2], "scalars.json"),
                Path(tmp) / "missing.json",
            ):
                with self.subTest(path=path.name):
                    with self.assertRaises(RecordSourceError):
                        load_records(path)


class TestRenderCommand(unittest.TestCase):
    def test_render_writes_grouped_page(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            items = _write_json(tmp_path, _ITEMS)
            config = _write_config(tmp_path, tmp_path / "output")

            result = CliRunner().invoke(
                cli,
                ["--config", str(config), "render", str(items), "--group", "type", "--expand", "book"],
                catch_exceptions=False,
            )

            self.assertEqual(result.exit_code, 0, result.output)
            pages = list((tmp_path / "output" / "html").glob("render_*.html"))
            self.assertEqual(len(pages), 1)
            content = pages[0].read_text(encoding="utf-8")

        self.assertIn("<!DOCTYPE html>", content)
        self.assertIn("3 records", content)
        self.assertIn('class="zotero-group zotero-group-expanded"', content)
        self.assertIn(">Journal Article</h2>", content)
        self.assertLess(content.index("The Art of Computer Programming"), content.index("Structure and Interpretation"))

    def test_render_with_details_writes_detail_view(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            items = _write_json(tmp_path, _ITEMS)
            config = _write_config(tmp_path, tmp_path / "output")

            result = CliRunner().invoke(
                cli,
                ["--config", str(config), "render", str(items), "--details", "BBBB2222"],
                catch_exceptions=False,
            )

            self.assertEqual(result.exit_code, 0, result.output)
            content = next((tmp_path / "output" / "html").glob("render_*.html")).read_text(encoding="utf-8")

        self.assertIn("zotero-details", content)
        self.assertIn("Go To Statement Considered Harmful", content)
        self.assertNotIn("Structure and Interpretation", content)

    def test_render_unknown_details_key_aborts(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            items = _write_json(tmp_path, _ITEMS)
            config = _write_config(tmp_path, tmp_path / "output")

            result = CliRunner().invoke(cli, ["--config", str(config), "render", str(items), "--details", "NOPE"])

            self.assertNotEqual(result.exit_code, 0)
            self.assertFalse((tmp_path / "output" / "html").exists())

    def test_expand_without_group_is_a_usage_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            items = _write_json(tmp_path, _ITEMS)
            config = _write_config(tmp_path, tmp_path / "output")

            result = CliRunner().invoke(cli, ["--config", str(config), "render", str(items), "--expand", "book"])

        self.assertEqual(result.exit_code, 2)


class TestSummaryCommand(unittest.TestCase):
    def test_grouped_summary_lines(self) -> None:
        cfg = load_config_with_defaults()
        cfg = replace(cfg, display=replace(cfg.display, group="type", expand="all"))

        self.assertEqual(SummaryCommand(config=cfg, records=_ITEMS).execute(), ["+ Book (2)", "+ Journal Article (1)"])

    def test_flat_summary_lines(self) -> None:
        lines = SummaryCommand(config=load_config_with_defaults(), records=_ITEMS).execute()

        self.assertEqual(lines[0], "1. [AAAA1111] Structure and Interpretation")
        self.assertEqual(len(lines), 3)

    def test_summary_command_via_cli(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            items = _write_json(tmp_path, _ITEMS)
            config = _write_config(tmp_path, tmp_path / "output", group="type")

            result = CliRunner().invoke(cli, ["--config", str(config), "summary", str(items)])

        self.assertEqual(result.exit_code, 0, result.output)


if __name__ == "__main__":
    unittest.main()
