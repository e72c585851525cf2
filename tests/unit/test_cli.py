"""Test the curtains command-line interface."""

import json

import pytest
from curtains.cli import main
from curtains.config import BuildOptions
from curtains.errors import OptionsError

DECK = "<style>h1 { color: navy; }</style>\n===\n# Hello\n===\n## World\n"


@pytest.fixture
def deck(tmp_path):
    path = tmp_path / "deck.curtain"
    path.write_text(DECK, encoding="utf-8")
    return path


def test_build_default_output(deck):
    assert main(["build", str(deck)]) == 0

    html = deck.with_suffix(".html").read_text(encoding="utf-8")
    assert html.count('<section class="curtains-slide">') == 2
    assert 'data-theme="light"' in html


def test_build_with_output_and_theme(deck, tmp_path):
    output = tmp_path / "out" / "talk.html"
    output.parent.mkdir()

    assert main(["build", str(deck), "-o", str(output), "--theme", "dark"]) == 0
    assert 'data-theme="dark"' in output.read_text(encoding="utf-8")


def test_build_rejects_wrong_extension(tmp_path):
    source = tmp_path / "deck.md"
    source.write_text(DECK, encoding="utf-8")

    assert main(["build", str(source)]) == 1


def test_build_missing_file(tmp_path):
    assert main(["build", str(tmp_path / "missing.curtain")]) == 2


def test_build_parse_error(tmp_path):
    source = tmp_path / "broken.curtain"
    source.write_text("===\n<container>\nunclosed", encoding="utf-8")

    assert main(["build", str(source)]) == 3
    assert not source.with_suffix(".html").exists()


def test_build_without_slides(tmp_path):
    source = tmp_path / "empty.curtain"
    source.write_text("# No delimiter", encoding="utf-8")

    assert main(["build", str(source)]) == 4


def test_build_unwritable_output(deck, tmp_path):
    output = tmp_path / "no-such-dir" / "deck.html"

    assert main(["build", str(deck), "-o", str(output)]) == 5


def test_parse_prints_json(deck, capsys):
    assert main(["parse", str(deck)]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["globalCSS"] == "h1 { color: navy; }"
    assert [s["index"] for s in data["slides"]] == [0, 1]
    assert data["slides"][0]["ast"]["children"][0]["type"] == "heading"


def test_unknown_theme_is_usage_error(deck):
    with pytest.raises(SystemExit):
        main(["build", str(deck), "--theme", "sepia"])


def test_build_options_from_args():
    options = BuildOptions.from_args("slides/deck.curtain")

    assert options.output == "slides/deck.html"
    assert options.theme == "light"

    with pytest.raises(OptionsError):
        BuildOptions.from_args("deck.curtain", "deck.txt")
    with pytest.raises(OptionsError):
        BuildOptions.from_args("deck.curtain", theme="sepia")


def test_debug_flag_after_subcommand(deck):
    assert main(["build", str(deck), "--debug"]) == 0
