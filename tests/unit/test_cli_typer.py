# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.


import io
import json
import re
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from pypdf import PdfReader
from typer.testing import CliRunner

from lookbook.cli import app
from tests.test_support import FakeHtmlToPdf, item_mapping, temp_env

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")

CONFIG_TOML = """
[site]
base_origin = "https://shop.test"

[catalog]
theme = "customer"
backend = "vector"
"""


def _strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def _write_input(directory: Path, count: int, *, image_url: str | None = None) -> Path:
    items = []
    for index in range(1, count + 1):
        entry = item_mapping(index)
        entry["images"] = [image_url] if image_url else []
        items.append(entry)
    path = directory / "exhibition.json"
    path.write_text(
        json.dumps({"metadata": {"code": "EX24", "title": "Spring"}, "items": items}),
        encoding="utf-8",
    )
    return path


class TestCliTyper(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp = Path(self._tmp.name)
        self.config_path = self.tmp / "config.toml"
        self.config_path.write_text(CONFIG_TOML, encoding="utf-8")
        self.out_dir = self.tmp / "out"

    def _invoke(self, *args: str):
        return self.runner.invoke(app, ["--config", str(self.config_path), *args])

    def test_root_info_commands(self) -> None:
        result = self.runner.invoke(app, ["--help"])
        self.assertEqual(result.exit_code, 0)
        output = _strip_ansi(result.output)
        commands = ("catalog", "tags", "screen", "ranking", "items-csv", "config", "init-config")
        for command in commands:
            self.assertIn(command, output)

        result = self.runner.invoke(app, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("lookbook", result.output.lower())

    def test_root_without_subcommand_references_help(self) -> None:
        result = self.runner.invoke(app, [])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("lookbook --help", result.output)

    def test_catalog_vector_writes_pdf(self) -> None:
        source = _write_input(self.tmp, 23)
        result = self._invoke("catalog", str(source), "-o", str(self.out_dir))
        self.assertEqual(result.exit_code, 0, result.output)
        pdf_path = self.out_dir / "EX24_customer.pdf"
        self.assertTrue(pdf_path.is_file())
        self.assertEqual(len(PdfReader(io.BytesIO(pdf_path.read_bytes())).pages), 4)
        self.assertIn("EX24_customer.pdf", _strip_ansi(result.output))

    def test_catalog_html_backend_uses_browser(self) -> None:
        source = _write_input(self.tmp, 3)
        renderer = FakeHtmlToPdf()
        with mock.patch("lookbook.render.html_to_pdf.render_html_to_pdf", renderer):
            result = self._invoke(
                "catalog", str(source), "--theme", "internal", "--backend", "html",
                "-o", str(self.out_dir),
            )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((self.out_dir / "EX24_internal.pdf").is_file())
        self.assertEqual(len(renderer.calls), 1)

    def test_failed_images_are_reported(self) -> None:
        source = _write_input(self.tmp, 2, image_url="file:///missing.png")
        result = self._invoke("catalog", str(source), "-o", str(self.out_dir))
        self.assertEqual(result.exit_code, 0, result.output)
        output = _strip_ansi(result.output)
        self.assertIn("1 image(s) could not be embedded", output)
        self.assertIn("file:///missing.png", output)

    def test_quiet_suppresses_output(self) -> None:
        source = _write_input(self.tmp, 2, image_url="file:///missing.png")
        result = self.runner.invoke(
            app,
            ["--config", str(self.config_path), "--quiet", "catalog", str(source),
             "-o", str(self.out_dir)],
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "")

    def test_tags_and_csv_and_screen(self) -> None:
        source = _write_input(self.tmp, 30)
        cases = (
            (("tags", str(source)), "EX24_tags.pdf"),
            (("items-csv", str(source)), "EX24_items.csv"),
            (("screen", str(source), "--theme", "pickup"), "EX24_pickup.html"),
        )
        for args, filename in cases:
            with self.subTest(command=args[0]):
                result = self._invoke(*args, "-o", str(self.out_dir))
                self.assertEqual(result.exit_code, 0, result.output)
                self.assertTrue((self.out_dir / filename).is_file())

    def test_ranking_counts_pickups(self) -> None:
        document = {
            "metadata": {"code": "EX24", "title": "Spring"},
            "items": [item_mapping(index, images=[]) for index in (1, 2, 3)],
            "pickups": [
                {"pickup_code": "P-1", "item_ids": ["item-3", "item-1"]},
                {"pickup_code": "P-2", "item_ids": ["item-3"]},
            ],
        }
        source = self.tmp / "ranking.json"
        source.write_text(json.dumps(document), encoding="utf-8")
        result = self._invoke(
            "ranking", str(source), "--backend", "vector", "-o", str(self.out_dir)
        )
        self.assertEqual(result.exit_code, 0, result.output)
        pdf_path = self.out_dir / "EX24_ranking.pdf"
        reader = PdfReader(io.BytesIO(pdf_path.read_bytes()))
        self.assertEqual(len(reader.pages), 2)
        text = reader.pages[1].extract_text()
        self.assertIn("No.1", text)
        self.assertIn("67%", text)

    def test_ranking_without_pickups_fails(self) -> None:
        source = _write_input(self.tmp, 2)
        result = self._invoke("ranking", str(source), "-o", str(self.out_dir))
        self.assertEqual(result.exit_code, 2)
        self.assertIn("no picked-up items", _strip_ansi(result.output))

    def test_errors_exit_with_code_two(self) -> None:
        cases = (
            ("catalog", str(self.tmp / "missing.json")),
            ("catalog", str(_write_input(self.tmp, 0))),
            ("catalog", str(_write_input(self.tmp, 1)), "--theme", "neon"),
        )
        for args in cases:
            with self.subTest(args=args):
                result = self._invoke(*args, "-o", str(self.out_dir))
                self.assertEqual(result.exit_code, 2)
                self.assertIn("Error:", result.output)

    def test_invalid_backend_is_rejected(self) -> None:
        source = _write_input(self.tmp, 1)
        result = self._invoke("catalog", str(source), "--backend", "docx")
        self.assertEqual(result.exit_code, 2)

    def test_config_command(self) -> None:
        result = self._invoke("config")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("config.toml", _strip_ansi(result.output))

        with temp_env({"XDG_CONFIG_HOME": str(self.tmp / "xdg")}):
            result = self.runner.invoke(app, ["init-config"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((self.tmp / "xdg" / "lookbook" / "config.toml").is_file())


if __name__ == "__main__":
    unittest.main()
