"""Test style block extraction."""

import pytest
from curtains.styles import extract_global_styles, extract_slide_styles, extract_styles


def test_extracts_single_block():
    result = extract_styles("<style>.a{color:red}</style>\n# T", "slide")

    assert result.content == "# T"
    assert [s.css for s in result.styles] == [".a{color:red}"]
    assert result.styles[0].scope == "slide"


def test_multiple_blocks_keep_source_order():
    content = "<style>h1 { color: red; }</style>\nText\n<style>\n  p { margin: 0; }\n</style>"
    result = extract_styles(content, "global")

    assert [s.css for s in result.styles] == ["h1 { color: red; }", "p { margin: 0; }"]
    assert all(s.scope == "global" for s in result.styles)
    assert result.content == "Text"


def test_tags_are_case_insensitive_and_accept_attributes():
    result = extract_styles('<STYLE type="text/css">b{}</Style>Body', "slide")

    assert result.content == "Body"
    assert result.styles[0].css == "b{}"


def test_empty_block_still_yields_fragment():
    result = extract_styles("<style>   </style>Hello", "slide")

    assert len(result.styles) == 1
    assert result.styles[0].css == ""
    assert result.content == "Hello"


def test_no_styles_trims_content():
    result = extract_styles("\n\n  # Heading\n\n", "slide")

    assert result.styles == []
    assert result.content == "# Heading"


def test_extraction_is_idempotent():
    first = extract_styles("<style>.a{}</style>\n# A\n<style>.b{}</style>", "slide")
    second = extract_styles(first.content, "slide")

    assert second.content == first.content
    assert second.styles == []


def test_unknown_scope_rejected():
    with pytest.raises(ValueError):
        extract_styles("text", "page")


def test_combined_css_helpers():
    content = "<style>.a{}</style><style>.b{}</style>"

    assert extract_global_styles(content) == ".a{}\n.b{}"
    assert extract_slide_styles(content) == ".a{}\n.b{}"
    assert extract_global_styles("Just prose") == ""
