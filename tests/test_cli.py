"""
Tests for the recipe_converter command line.
"""

import io
import json

import pytest

import recipe_converter

pytestmark = pytest.mark.usefixtures("isolated_env")


class TestSafeFilename:
    def test_title_becomes_filename(self):
        assert recipe_converter.safe_filename("Buttery Sandwich Loaf!") == "buttery_sandwich_loaf"

    def test_empty_title(self):
        assert recipe_converter.safe_filename("???") == "recipe"


class TestMain:
    """Tests for main() exit codes and output files."""

    def test_converts_file(self, tmp_path, yeast_text, capsys):
        source = tmp_path / "loaf.txt"
        source.write_text(yeast_text, encoding="utf-8")
        output_dir = tmp_path / "out"

        assert recipe_converter.main([str(source), "--output-dir", str(output_dir)]) == 0

        result = json.loads((output_dir / "buttery_sandwich_loaf.json").read_text(encoding="utf-8"))
        assert result["direction"] == "yeast-to-sourdough"
        out = capsys.readouterr().out
        assert "Recipe converted: Buttery Sandwich Loaf (yeast-to-sourdough)" in out
        assert "Levain:" in out

    def test_reads_stdin(self, tmp_path, monkeypatch, sourdough_text):
        monkeypatch.setattr("sys.stdin", io.StringIO(sourdough_text))
        output_dir = tmp_path / "out"

        assert recipe_converter.main(["-", "--output-dir", str(output_dir)]) == 0
        assert (output_dir / "converted_bread_recipe.json").exists()

    def test_html_file(self, tmp_path):
        source = tmp_path / "page.html"
        source.write_text(
            "<html><body><article><h1>Lean Loaf</h1>"
            "<p>500g bread flour</p><p>350g water</p><p>100g active starter</p>"
            "<p>10g salt</p></article></body></html>",
            encoding="utf-8")

        assert recipe_converter.main([str(source), "--output-dir", str(tmp_path / "out")]) == 0
        assert (tmp_path / "out" / "lean_loaf.json").exists()

    def test_direction_flag(self, tmp_path, sourdough_text):
        source = tmp_path / "loaf.txt"
        source.write_text(sourdough_text, encoding="utf-8")
        output_dir = tmp_path / "out"

        assert recipe_converter.main([
            str(source), "--direction", "sourdough-to-yeast",
            "--starter-hydration", "100", "--output-dir", str(output_dir)]) == 0
        result = json.loads((output_dir / "converted_bread_recipe.json").read_text(encoding="utf-8"))
        assert result["conversion"]["converted"]["starterAmount"] == 0

    def test_unusable_recipe_fails(self, tmp_path):
        source = tmp_path / "notes.txt"
        source.write_text("Mix 50g flour with 20g water.", encoding="utf-8")
        output_dir = tmp_path / "out"

        assert recipe_converter.main([str(source), "--output-dir", str(output_dir)]) == 1
        assert not output_dir.exists()

    def test_missing_file_fails(self, tmp_path):
        assert recipe_converter.main([str(tmp_path / "missing.txt")]) == 1

    def test_invalid_option_fails(self, tmp_path):
        source = tmp_path / "loaf.txt"
        source.write_text("500g bread flour", encoding="utf-8")
        assert recipe_converter.main([str(source), "--starter-hydration", "-5"]) == 1
