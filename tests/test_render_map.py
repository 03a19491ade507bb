"""Tests for block render map resolution."""

import pytest
from pydantic import ValidationError

from html_blocks.models import BlockRenderConfig
from html_blocks.render_map import DEFAULT_BLOCK_RENDER_MAP, build_block_type_map, disambiguate


class TestBuildBlockTypeMap:
    """Test tag -> block type map construction."""

    def test_default_map(self):
        """The default render map resolves every known tag."""
        block_type_map = build_block_type_map(DEFAULT_BLOCK_RENDER_MAP)

        assert block_type_map["h1"] == ("header-one",)
        assert block_type_map["h6"] == ("header-six",)
        assert block_type_map["blockquote"] == ("blockquote",)
        assert block_type_map["figure"] == ("atomic",)
        assert block_type_map["pre"] == ("code-block",)
        assert block_type_map["div"] == ("unstyled",)
        assert block_type_map["p"] == ("unstyled",)
        assert block_type_map["li"] == ("unordered-list-item", "ordered-list-item")

    def test_ambiguous_tags_keep_render_map_order(self):
        """Candidates appear in render map insertion order."""
        block_type_map = build_block_type_map({
            "first": {"element": "x"},
            "second": {"element": "y", "aliased_elements": ["x"]},
            "third": {"element": "x"},
        })

        assert block_type_map["x"] == ("first", "second", "third")
        assert block_type_map["y"] == ("second",)

    def test_accepts_models_and_dicts(self):
        """Render configs may be models or plain mappings."""
        block_type_map = build_block_type_map({
            "a": BlockRenderConfig(element="section"),
            "b": {"element": "article"},
        })

        assert block_type_map["section"] == ("a",)
        assert block_type_map["article"] == ("b",)

    def test_result_is_read_only(self):
        """The map cannot be modified after construction."""
        block_type_map = build_block_type_map(DEFAULT_BLOCK_RENDER_MAP)
        with pytest.raises(TypeError):
            block_type_map["span"] = ("unstyled",)

    def test_invalid_render_config(self):
        """A render config without an element is rejected."""
        with pytest.raises(ValidationError):
            build_block_type_map({"broken": {"aliased_elements": ["p"]}})


class TestDisambiguate:
    """Test the default disambiguation function."""

    def test_list_items(self):
        """li follows its list wrapper."""
        assert disambiguate("li", "ol") == "ordered-list-item"
        assert disambiguate("li", "ul") == "unordered-list-item"
        assert disambiguate("li", "pre") == "unordered-list-item"

    def test_other_tags(self):
        """Other tags have no contextual answer."""
        assert disambiguate("p", "ol") is None
