"""Tests for layout nodes and boxes."""

import numpy as np
import pytest

from pagebuilder.core import Box, LayoutNode, copy_tree, find_in_tree, iter_tree
from pagebuilder.core.box import parse_length


def test_iter_and_find(page_tree):
    assert [node.el for node in iter_tree(page_tree)] == [
        "el_banner", "el_logo", "el_hidden", "el_hidden_child", "el_footer",
    ]
    assert find_in_tree(page_tree, "el_hidden_child").name == "Image"
    assert find_in_tree(page_tree, "nope") is None
    assert page_tree[0].find("el_footer") is None


def test_copy_is_deep(page_tree):
    copied = copy_tree(page_tree)
    copied[0].children[0].props["src"] = "other.png"

    assert copied != page_tree
    assert page_tree[0].children[0].props["src"] == "logo.png"


def test_shallow_copy_drops_children(page_tree):
    assert page_tree[0].copy(deep=False).children == []


def test_remove_child(page_tree):
    banner = page_tree[0]
    logo = banner.children[0]
    assert banner.remove_child(logo)
    assert not banner.remove_child(logo)
    assert [child.el for child in banner.children] == ["el_hidden"]


def test_wire_format(page_tree):
    data = page_tree[0].to_dict()

    assert data["el"] == "el_banner"
    assert data["children"][1]["hide"] is True
    assert "children" not in data["children"][0]
    assert LayoutNode.from_dict(data) == page_tree[0]


@pytest.mark.parametrize(
    "value,expected",
    [(None, 0.0), ("", 0.0), ("auto", 0.0), (12, 12.0), (12.5, 12.5), ("40px", 40.0), (" 7 ", 7.0)],
)
def test_parse_length(value, expected):
    assert parse_length(value) == expected


@pytest.mark.parametrize("value", ["50%", "1em", True])
def test_parse_length_rejects_relative_units(value):
    with pytest.raises(ValueError):
        parse_length(value)


def test_box_conversions():
    box = Box.from_style({"width": "100px", "height": 50, "left": "10px"})

    assert box == Box(100, 50, 10, 0)
    np.testing.assert_array_equal(box.size, [100, 50])
    np.testing.assert_array_equal(box.position, [10, 0])
    assert box.to_style() == {"width": "100px", "height": "50px", "left": "10px", "top": "0px"}
    assert Box.from_payload(box.to_payload()) == box
    assert Box.from_arrays(box.size, box.position) == box
