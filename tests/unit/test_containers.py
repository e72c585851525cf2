"""Test recursive container extraction."""

import pytest
from curtains.config import REGEX, ParserConfig
from curtains.containers import ParseContext, parse_containers
from curtains.errors import ClassNameError, NestingDepthError, StructuralParseError
from curtains.models import Container, Heading, ListNode, Paragraph, SlideSource, Text
from curtains.slides import process_slide


def test_lone_container_becomes_placeholder():
    result = parse_containers('<container class="highlight">## Inner</container>')

    assert REGEX["PLACEHOLDER"].fullmatch(result.marked.strip())
    assert list(result.containers) == [result.marked.strip()]

    container = result.containers[result.marked.strip()]
    assert container.classes == ["highlight"]
    assert container.children == [Heading(depth=2, children=[Text(value="Inner")])]


def test_text_without_containers_is_unchanged():
    text = "# Title\n\nNo containers <b>here</b>."
    result = parse_containers(text)

    assert result.marked == text
    assert result.containers == {}


def test_container_without_class():
    result = parse_containers("<container>Hi</container>")

    (container,) = result.containers.values()
    assert container.classes == []
    assert container.children == [Paragraph(children=[Text(value="Hi")])]


def test_multiple_classes():
    result = parse_containers('<container class="class1 class-2 class_3">\n# Multiple\n</container>')

    (container,) = result.containers.values()
    assert container.classes == ["class1", "class-2", "class_3"]
    assert container.children == [Heading(depth=1, children=[Text(value="Multiple")])]


def test_other_attributes_ending_in_class_are_ignored():
    result = parse_containers('<container data-class="a b!" class="ok">Hi</container>')

    (container,) = result.containers.values()
    assert container.classes == ["ok"]


def test_single_quoted_class():
    result = parse_containers("<container class='note'>Hi</container>")

    (container,) = result.containers.values()
    assert container.classes == ["note"]


def test_nested_containers():
    text = '<container class="outer">\n<container class="inner">\nHello\n</container>\n</container>'
    result = parse_containers(text)

    (outer,) = result.containers.values()
    assert outer.classes == ["outer"]
    assert outer.children == [
        Container(classes=["inner"], children=[Paragraph(children=[Text(value="Hello")])])
    ]


def test_sibling_containers_get_distinct_keys():
    text = '<container class="a">One</container>\n\n<container class="b">Two</container>'
    result = parse_containers(text)

    keys = list(result.containers)
    assert len(keys) == 2
    assert len(set(keys)) == 2
    assert [c.classes for c in result.containers.values()] == [["a"], ["b"]]
    assert result.marked.index(keys[0]) < result.marked.index(keys[1])


def test_context_keys_do_not_collide_between_parses():
    first = parse_containers("<container>x</container>")
    second = parse_containers("<container>x</container>")

    assert set(first.containers).isdisjoint(second.containers)


def test_shared_context_continues_numbering():
    context = ParseContext()
    first = parse_containers("<container>x</container>", context=context)
    second = parse_containers("<container>y</container>", context=context)

    assert set(first.containers).isdisjoint(second.containers)
    assert all(context.nonce in key for key in [*first.containers, *second.containers])


def test_inner_text_is_dedented():
    text = '<container class="card">\n    ## Indented\n    text\n</container>'
    result = parse_containers(text)

    (container,) = result.containers.values()
    assert container.children[0] == Heading(depth=2, children=[Text(value="Indented")])


def test_container_inside_list_item():
    text = '- item\n\n  <container class="box">inside</container>'
    slide = process_slide(SlideSource(content=text, index=0))

    (lst,) = slide.ast.children
    assert isinstance(lst, ListNode)
    item = lst.children[0]
    assert item.children[-1] == Container(classes=["box"], children=[Paragraph(children=[Text(value="inside")])])


def test_inline_container_stays_in_paragraph():
    text = 'Before <container class="x">mid</container> after'
    slide = process_slide(SlideSource(content=text, index=0))

    assert slide.ast.children == [
        Paragraph(children=[
            Text(value="Before "),
            Container(classes=["x"], children=[Paragraph(children=[Text(value="mid")])]),
            Text(value=" after"),
        ])
    ]


def test_tags_are_case_insensitive():
    result = parse_containers('<CONTAINER class="box">Hi</Container>')

    (container,) = result.containers.values()
    assert container.classes == ["box"]


@pytest.mark.parametrize("class_attr", ['"a b!"', '"a.b"', '"#id"', '"x@y"'])
def test_invalid_class_rejected(class_attr):
    with pytest.raises(ClassNameError):
        parse_containers(f"<container class={class_attr}>Hi</container>")


def test_unclosed_container():
    with pytest.raises(StructuralParseError, match="Missing </container>"):
        parse_containers('<container class="a">\nnever closed')


def test_unmatched_close():
    with pytest.raises(StructuralParseError, match="line 2"):
        parse_containers("text\n</container>")


def test_depth_at_limit_succeeds(nested_source):
    result = parse_containers(nested_source(10))

    node = next(iter(result.containers.values()))
    for _ in range(9):
        assert node.classes == ["level"]
        (node,) = node.children
    assert node.children == [Paragraph(children=[Text(value="x")])]


def test_depth_over_limit_fails(nested_source):
    with pytest.raises(NestingDepthError):
        parse_containers(nested_source(11))


def test_configured_depth_limit(nested_source):
    config = ParserConfig(max_nesting_depth=2)

    parse_containers(nested_source(2), config=config)
    with pytest.raises(NestingDepthError):
        parse_containers(nested_source(3), config=config)
