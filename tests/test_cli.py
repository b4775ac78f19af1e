import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from lyricnorm import config
from lyricnorm.cli import _default_filename, _slugify, main

FIXTURES = Path(__file__).parent / "fixtures"
TEXT_FIXTURE = str(FIXTURES / "amazing-grace.txt")
HTML_FIXTURE = str(FIXTURES / "amazing-grace.html")


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("lyricnorm")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# _slugify / _default_filename
# ---------------------------------------------------------------------------


def test_slugify_basic():
    assert _slugify("Amazing Grace") == "amazing-grace"


def test_slugify_punctuation():
    assert _slugify("Amazing Grace (My Chains Are Gone)") == "amazing-grace-my-chains-are-gone"


def test_slugify_collapses_spaces():
    assert _slugify("A  B") == "a-b"


def test_default_filename_uses_suffix(monkeypatch):
    assert _default_filename("How Great Thou Art") == "how-great-thou-art.txt"
    monkeypatch.setattr(config, "OUTPUT_SUFFIX", ".lyrics")
    assert _default_filename("How Great Thou Art") == "how-great-thou-art.lyrics"


def test_default_filename_for_empty_slug():
    assert _default_filename("???") == "untitled.txt"


# ---------------------------------------------------------------------------
# --help
# ---------------------------------------------------------------------------


def test_help_output():
    result = CliRunner().invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Normalize exported song lyrics" in result.output
    assert "--newline" in result.output


# ---------------------------------------------------------------------------
# --stdout
# ---------------------------------------------------------------------------


def test_stdout_flag_prints_sections():
    result = CliRunner().invoke(main, ["--stdout", TEXT_FIXTURE])
    assert result.exit_code == 0
    assert "(Verse 1)\nAmazing grace, how sweet the sound" in result.output
    assert "(Chorus 1)\nMy chains are gone" in result.output
    assert "REPEAT" not in result.output


def test_stdout_flag_does_not_write_file(tmp_path):
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
        result = runner.invoke(main, ["--stdout", TEXT_FIXTURE])
        assert result.exit_code == 0
        assert not any(Path(cwd).glob("*.txt"))


def test_crlf_newline_on_stdout():
    result = CliRunner().invoke(main, ["--stdout", "--newline", "crlf", "-"], input="(Tag)\none\ntwo\n")
    assert result.exit_code == 0
    assert result.stdout_bytes == b"(Tag)\r\none\r\ntwo\r\n"


def test_stdin_input():
    result = CliRunner().invoke(main, ["--stdout", "-"], input="C1\nHow sweet the sound\n")
    assert result.exit_code == 0
    assert "(Chorus 1)\nHow sweet the sound" in result.output


def test_html_input_auto_detected():
    result = CliRunner().invoke(main, ["--stdout", HTML_FIXTURE])
    assert result.exit_code == 0
    assert "(Bridge)\nI once was lost" in result.output
    assert "<br>" not in result.output


def test_html_flag_forces_html(tmp_path):
    path = tmp_path / "song.txt"
    path.write_text("(Tag)&lt;br&gt;x", encoding="utf-8")
    result = CliRunner().invoke(main, ["--stdout", "--html", str(path)])
    assert result.exit_code == 0
    assert "(Tag)\n<br>x" in result.output


# ---------------------------------------------------------------------------
# File output
# ---------------------------------------------------------------------------


def test_output_file_written_with_flag(tmp_path):
    out_file = tmp_path / "song.txt"
    result = CliRunner().invoke(main, ["-o", str(out_file), TEXT_FIXTURE])
    assert result.exit_code == 0
    assert out_file.read_text(encoding="utf-8").startswith("(Verse 1)\nAmazing grace")
    assert out_file.read_text(encoding="utf-8").endswith("My chains are gone\n")


def test_default_filename_derived_from_input(tmp_path):
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
        result = runner.invoke(main, [TEXT_FIXTURE])
        assert result.exit_code == 0
        assert "amazing-grace.txt" in result.output
        assert (Path(cwd) / "amazing-grace.txt").exists()


def test_title_option_sets_filename(tmp_path):
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
        result = runner.invoke(main, ["--title", "My Chains Are Gone", TEXT_FIXTURE])
        assert result.exit_code == 0
        assert (Path(cwd) / "my-chains-are-gone.txt").exists()


def test_crlf_newline_in_file(tmp_path):
    out_file = tmp_path / "song.txt"
    result = CliRunner().invoke(main, ["--newline", "crlf", "-o", str(out_file), TEXT_FIXTURE])
    assert result.exit_code == 0
    data = out_file.read_bytes()
    assert b"(Verse 1)\r\nAmazing grace" in data
    assert b"\r\n\r\n(Chorus 1)\r\n" in data
    assert b"\r\r\n" not in data


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


def test_missing_input_exits_nonzero(tmp_path):
    result = CliRunner().invoke(main, ["--stdout", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_empty_result_exits_nonzero(tmp_path):
    path = tmp_path / "noise.txt"
    path.write_text("(Chorus)\nG  D\n(2X)\n", encoding="utf-8")
    result = CliRunner().invoke(main, ["--stdout", str(path)])
    assert result.exit_code == 1
    assert "No lyric content found" in result.output


def test_empty_stdin_exits_nonzero():
    result = CliRunner().invoke(main, ["--stdout", "-"], input="")
    assert result.exit_code == 1
    assert "stdin" in result.output


def test_invalid_config_exits_nonzero(monkeypatch):
    monkeypatch.setattr(config, "LOG_LEVEL", "LOUD")
    result = CliRunner().invoke(main, ["--stdout", TEXT_FIXTURE])
    assert result.exit_code == 1
    assert "LYRICNORM_LOG_LEVEL" in result.output


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def test_unknown_sections_warned(tmp_path):
    path = tmp_path / "loose.txt"
    path.write_text("just words\n(Chorus)\nrefrain", encoding="utf-8")
    result = CliRunner().invoke(main, ["--stdout", str(path)])
    assert result.exit_code == 0
    assert "(Unknown)\njust words" in result.output
    assert "unlabelled sections" in result.output


def test_log_file_written(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    result = CliRunner().invoke(main, ["--stdout", "-v", "--log-file", str(log_file), TEXT_FIXTURE])
    assert result.exit_code == 0
    assert log_file.exists()
    assert "Read " in log_file.read_text(encoding="utf-8")
