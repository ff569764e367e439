"""Tests for AbstractElementParser and the default handlers."""

from typing import Any

import pytest

from ogcxml.errors import (
    ElementContentError,
    InvalidArgumentError,
    ParserInstantiationError,
    UnterminatedElementError,
)
from ogcxml.parsing import (
    EXCEPTION,
    UNRECOGNIZED,
    AbstractElementParser,
    CompositeParser,
    ElementKind,
    QName,
)
from ogcxml.parsing.handlers import (
    BooleanIntegerParser,
    BooleanParser,
    DoubleParser,
    IntegerParser,
    StringParser,
    UnrecognizedElementParser,
)

NS = "urn:example:ns"


class PointParser(AbstractElementParser):
    """Parser with typed children, used to exercise the parse protocol."""

    attribute_fields = {"srs": "crs"}

    def allocate(self, ctx, event):
        default = None
        if event.name.local_name in ("x", "y"):
            default = ctx.get_double_parser()
        return ctx.allocate(event, default)


class KeywordsParser(AbstractElementParser):
    """Parser producing a list instead of itself."""

    def __init__(self, namespace_uri: str | None = "") -> None:
        super().__init__(namespace_uri)
        self.items: list[str] = []
        self.finished = False

    def allocate(self, ctx, event):
        return ctx.allocate(event, ctx.get_string_parser())

    def do_add_event_content(self, result: Any, kind: ElementKind, ctx, event, *args) -> None:
        self.items.append(result)

    def do_finish_parsing(self, ctx, event, *args) -> None:
        self.finished = True

    def result(self) -> list[str]:
        return self.items


class NeedsTwoArgs(CompositeParser):
    def __init__(self, namespace_uri: str, extra: str) -> None:
        super().__init__(namespace_uri)
        self.extra = extra


def _parse(make_context, parser, xml: str, **kwargs):
    ctx = make_context(xml, **kwargs)
    return ctx, parser.parse(ctx, ctx.next_event())


class TestParseProtocol:
    """Tests for the element loop of AbstractElementParser."""

    def test_composite_stores_children_by_local_name(self, make_context) -> None:
        """Child results are stored under the child's local name."""
        ctx, result = _parse(
            make_context,
            PointParser(NS),
            f'<p xmlns="{NS}" srs="EPSG:4326" other="x"><x>5.5</x><y> 52 </y></p>',
            default_namespace=NS,
        )

        assert result.get_field("x") == 5.5
        assert result.get_field(QName(NS, "y")) == 52.0
        assert result.get_field("crs") == "EPSG:4326"
        assert not result.has_field("other")

    def test_all_attributes_kept_without_attribute_fields(self, make_context) -> None:
        """Without attribute_fields every attribute is stored by local name."""
        ctx, result = _parse(
            make_context,
            CompositeParser(),
            '<a xmlns:x="urn:x" x:href="h" plain="p"/>',
        )
        assert result.get_field("href") == "h"
        assert result.get_field("plain") == "p"

    def test_parse_returns_result(self, make_context) -> None:
        """parse returns result() and calls do_finish_parsing."""
        parser = KeywordsParser()
        ctx, result = _parse(make_context, parser, "<k><w>one</w><w>two</w></k>")

        assert result == ["one", "two"]
        assert parser.finished

    def test_stream_positioned_after_end(self, make_context) -> None:
        """After parse the next event follows the element's end tag."""
        ctx = make_context("<r><a><b>x</b></a><c/></r>")
        ctx.next_event()
        parser = CompositeParser()
        parser.parse(ctx, ctx.next_event())

        following = ctx.next_event()
        assert following.is_start_element
        assert following.name == QName.local("c")

    def test_characters_accumulated(self, make_context) -> None:
        """Direct text is collected in the characters field."""
        ctx, result = _parse(make_context, CompositeParser(), "<a>one<b/>two</a>")
        assert result.characters == "onetwo"

    def test_unterminated_element(self, make_context) -> None:
        """The stream ending before the end tag raises UnterminatedElementError."""
        ctx = make_context("<a>\n<b>text</b>\n")
        with pytest.raises(UnterminatedElementError) as exc_info:
            CompositeParser().parse(ctx, ctx.next_event())
        assert exc_info.value.element_name == "a"
        assert exc_info.value.line is not None

    def test_none_arguments_rejected(self, make_context) -> None:
        """parse refuses a None context or event."""
        ctx = make_context("<a/>")
        with pytest.raises(InvalidArgumentError):
            CompositeParser().parse(None, ctx.next_event())
        with pytest.raises(InvalidArgumentError):
            CompositeParser().parse(ctx, None)

    def test_args_passed_to_children(self, make_context) -> None:
        """Caller arguments reach every child parser."""
        seen = []

        class Recorder(CompositeParser):
            def parse(self, ctx, event, *args):
                seen.append(args)
                return super().parse(ctx, event, *args)

        ctx = make_context("<a><b/></a>")
        ctx.register_parser(QName.local("b"), Recorder())
        Recorder().parse(ctx, ctx.next_event(), "extra", 1)

        assert seen == [("extra", 1), ("extra", 1)]


class TestUnrecognizedElements:
    """Tests for elements without a registered parser."""

    def test_unknown_child_notified_and_skipped(self, make_context, notifications) -> None:
        """An unknown child raises one notification and is consumed."""
        ctx = make_context(
            "<a><mystery><deep>1</deep></mystery><b/></a>",
            notification_listener=notifications.append,
        )
        ctx.register_parser(QName.local("b"), CompositeParser())

        result = CompositeParser().parse(ctx, ctx.next_event())

        assert [n.property_name for n in notifications] == [UNRECOGNIZED]
        assert notifications[0].event.name == QName.local("mystery")
        mystery = result.get_field("mystery")
        assert isinstance(mystery, UnrecognizedElementParser)
        assert mystery.element_kind is ElementKind.UNRECOGNIZED
        assert mystery.get_field("deep").characters == "1"
        assert result.has_field("b")

    def test_unrecognized_keeps_attributes(self, make_context) -> None:
        """The unrecognized parser keeps attributes and text."""
        ctx = make_context('<x kind="vendor">text</x>')
        result = UnrecognizedElementParser().parse(ctx, ctx.next_event())
        assert result.get_field("kind") == "vendor"
        assert result.characters == "text"


class TestLeafParsers:
    """Tests for the typed leaf parsers."""

    @pytest.mark.parametrize(
        "parser, text, expected",
        [
            (StringParser(), "  hello  ", "hello"),
            (DoubleParser(), "2.5", 2.5),
            (IntegerParser(), "42", 42),
            (BooleanParser(), "TRUE", True),
            (BooleanParser(), "0", False),
            (BooleanIntegerParser(), "1", True),
            (BooleanIntegerParser(), "0", False),
        ],
    )
    def test_conversion(self, make_context, parser, text, expected) -> None:
        """Leaf parsers convert their element text."""
        ctx, result = _parse(make_context, parser.new_instance(), f"<v>{text}</v>")
        assert result == expected

    def test_empty_element_yields_none(self, make_context) -> None:
        """An empty element produces no value."""
        ctx, result = _parse(make_context, StringParser(), "<v/>")
        assert result is None

    @pytest.mark.parametrize(
        "parser, text",
        [
            (DoubleParser(), "abc"),
            (IntegerParser(), "4.5"),
            (BooleanParser(), "yes"),
            (BooleanIntegerParser(), "true"),
        ],
    )
    def test_invalid_content(self, make_context, parser, text) -> None:
        """Unconvertible text raises ElementContentError."""
        ctx = make_context(f"<v>{text}</v>")
        with pytest.raises(ElementContentError) as exc_info:
            parser.new_instance().parse(ctx, ctx.next_event())
        assert exc_info.value.element_name == "v"
        assert exc_info.value.text == text

    def test_invalid_child_reported_as_exception(self, make_context, notifications) -> None:
        """A parent reports a failing leaf child and keeps parsing."""
        ctx = make_context(
            "<p><x>abc</x><y>1</y></p>",
            notification_listener=notifications.append,
        )
        result = PointParser().parse(ctx, ctx.next_event())

        assert [n.property_name for n in notifications] == [EXCEPTION]
        assert isinstance(notifications[0].new_value, ElementContentError)
        assert not result.has_field("x")
        assert result.get_field("y") == 1.0

    def test_nested_elements_ignored(self, make_context, notifications) -> None:
        """Leaf parsers consume nested elements without notifications."""
        ctx = make_context(
            "<v>text<b>inner</b></v>",
            notification_listener=notifications.append,
        )
        result = StringParser().parse(ctx, ctx.next_event())
        assert result == "text"
        assert notifications == []

    def test_leaf_element_kind(self) -> None:
        """Leaf parsers classify their results as leaf values."""
        assert StringParser().element_kind is ElementKind.LEAF_VALUE


class TestNewInstance:
    """Tests for prototype instancing."""

    def test_new_instance_keeps_namespace(self) -> None:
        """new_instance builds a fresh parser of the same class and namespace."""
        prototype = PointParser(NS)
        instance = prototype.new_instance()
        assert type(instance) is PointParser
        assert instance.namespace_uri == NS
        assert instance is not prototype

    def test_new_instance_failure(self) -> None:
        """Classes that cannot be built from a namespace raise ParserInstantiationError."""
        with pytest.raises(ParserInstantiationError):
            NeedsTwoArgs(NS, "x").new_instance()

    def test_fields_are_lazy(self) -> None:
        """A new parser has no fields until one is set."""
        parser = CompositeParser()
        assert not parser.has_fields()
        assert parser.get_field("anything") is None
        parser.set_fields({"a": 1})
        assert parser.has_fields()
