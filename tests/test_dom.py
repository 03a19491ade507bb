"""Tests for the markup node tree supplier."""

import logging

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.builder import ParserRejectedMarkup

from html_blocks.models import ElementNode, TextNode
from html_blocks.utils import dom
from html_blocks.utils.dom import clean_html_content, get_safe_body_from_html, node_from_soup, parse_html


class TestCleanHtmlContent:
    """Test unsafe content removal."""

    def test_removes_unsafe_tags(self):
        soup = BeautifulSoup(
            "<p>keep</p><script>x()</script><style>p{}</style><iframe src='x'></iframe>"
            "<noscript>n</noscript><object></object><embed>",
            "html.parser",
        )
        cleaned = clean_html_content(soup)

        assert cleaned.get_text() == "keep"
        for name in dom.TAGS_TO_REMOVE:
            assert cleaned.find(name) is None

    def test_removes_comments(self):
        soup = BeautifulSoup("<p>a<!-- hidden -->b</p>", "html.parser")
        assert "hidden" not in str(clean_html_content(soup))

    def test_none(self):
        assert clean_html_content(None) is None


class TestNodeFromSoup:
    """Test BeautifulSoup to node model conversion."""

    def test_structure(self):
        soup = BeautifulSoup('<div class="a b" ID="x"><b>bold</b> text</div>', "html.parser")
        node = node_from_soup(soup.div)

        assert node.tag == "div"
        assert node.attributes == {"class": "a b", "id": "x"}
        assert isinstance(node.children[0], ElementNode)
        assert node.children[0].children == [TextNode(content="bold")]
        assert node.children[1] == TextNode(content=" text")

    def test_skips_doctype_and_comments(self):
        soup = BeautifulSoup("<!DOCTYPE html><div><!-- c -->x</div>", "html.parser")
        node = node_from_soup(soup)

        assert [child.tag for child in node.children] == ["div"]
        assert node.children[0].children == [TextNode(content="x")]


class TestGetSafeBodyFromHtml:
    """Test get_safe_body_from_html."""

    def test_synthetic_body(self):
        body = get_safe_body_from_html("<p>a</p>text", parser="html.parser")

        assert body.tag == "body"
        assert body.children[0].tag == "p"
        assert body.children[1] == TextNode(content="text")

    def test_synthetic_body_skips_head(self):
        body = get_safe_body_from_html(
            "<html><head><title>Secret</title></head><p>x</p></html>",
            parser="html.parser",
        )

        assert body.tag == "body"
        assert [child.tag for child in body.children] == ["p"]

    def test_top_level_head_is_skipped(self):
        body = get_safe_body_from_html("<head><title>Secret</title></head><p>x</p>", parser="html.parser")
        assert [child.tag for child in body.children] == ["p"]

    def test_existing_body(self):
        body = get_safe_body_from_html(
            "<html><head><title>t</title></head><body class='page'><p>a</p></body></html>",
            parser="html.parser",
        )

        assert body.tag == "body"
        assert body.get("class") == "page"
        assert [child.tag for child in body.children] == ["p"]

    def test_sanitized(self):
        body = get_safe_body_from_html("<p>a<script>evil()</script></p>", parser="html.parser")
        assert body.children[0].children == [TextNode(content="a")]

    def test_rejected_markup(self, monkeypatch, caplog):
        def reject(html_content, parser=None):
            raise ParserRejectedMarkup("bad markup")

        monkeypatch.setattr(dom, "parse_html", reject)
        with caplog.at_level(logging.WARNING, logger="html_blocks.utils.dom"):
            assert get_safe_body_from_html("<p>") is None
        assert "rejected" in caplog.text

    def test_too_deep(self, monkeypatch):
        def recurse(element):
            raise RecursionError

        monkeypatch.setattr(dom, "node_from_soup", recurse)
        assert get_safe_body_from_html("<p>a</p>", parser="html.parser") is None


class TestParseHtml:
    """Test parser selection."""

    def test_missing_parser_falls_back(self, monkeypatch, caplog):
        calls = []

        class FakeSoup:
            def __init__(self, markup, features):
                calls.append(features)
                if features != dom.FALLBACK_PARSER:
                    raise FeatureNotFound(features)

        monkeypatch.setattr(dom, "BeautifulSoup", FakeSoup)
        with caplog.at_level(logging.WARNING, logger="html_blocks.utils.dom"):
            parse_html("<p>x</p>", parser="lxml")

        assert calls == ["lxml", "html.parser"]
        assert "not installed" in caplog.text

    def test_default_parser_from_settings(self, monkeypatch):
        monkeypatch.setattr(dom.settings, "html_parser", "html.parser")
        soup = parse_html("<p>x</p>")
        assert soup.p.get_text() == "x"
