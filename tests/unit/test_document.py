"""Unit tests for ux_smells.document module."""

import pytest

from ux_smells.document import (
    DocumentFormatError,
    is_mixed,
    load_elements,
    load_elements_file,
    strip_mixed,
)


class TestMixedValues:
    def test_is_mixed(self):
        assert is_mixed("mixed")
        assert is_mixed("MIXED")
        assert is_mixed({"mixed": True})
        assert not is_mixed({"mixed": False})
        assert not is_mixed(12)

    def test_strip_mixed(self):
        node = {
            "id": "1",
            "name": "mixed",
            "fontSize": "mixed",
            "lineHeight": {"mixed": True},
            "children": [{"id": "2"}],
            "width": 10,
        }
        assert strip_mixed(node) == {"id": "1", "name": "mixed", "width": 10}


class TestLoadElements:
    """Tests for flattening host documents."""

    def test_full_document(self, sample_document):
        elements = load_elements(sample_document)
        assert [e.id for e in elements] == ["1:1", "1:2", "1:3"]
        title = elements[1]
        assert title.font_size == 24
        assert title.font_name is None
        assert title.characters == "Sign in"

    def test_list_of_nodes(self):
        elements = load_elements(
            [
                {"id": "a", "type": "FRAME", "children": [{"id": "a1", "type": "TEXT"}]},
                {"id": "b", "type": "RECTANGLE"},
            ]
        )
        assert [e.id for e in elements] == ["a", "a1", "b"]

    def test_flat_elements(self):
        elements = load_elements({"elements": [{"id": "x"}, {"id": "y"}]})
        assert [e.id for e in elements] == ["x", "y"]

    def test_single_node(self):
        elements = load_elements({"id": "page", "type": "PAGE", "children": [{"id": "c"}]})
        assert [e.id for e in elements] == ["c"]

    def test_empty(self):
        assert load_elements([]) == []

    def test_unrecognized_shape(self):
        with pytest.raises(DocumentFormatError):
            load_elements("not a document")
        with pytest.raises(DocumentFormatError):
            load_elements({"foo": "bar"})

    def test_node_without_id(self):
        with pytest.raises(DocumentFormatError, match="Node without id"):
            load_elements([{"name": "Ghost"}])

    def test_non_object_node(self):
        with pytest.raises(DocumentFormatError):
            load_elements([1, 2])

    def test_invalid_values(self):
        with pytest.raises(DocumentFormatError, match="Invalid node"):
            load_elements([{"id": "bad", "width": "wide"}])


class TestLoadElementsFile:
    def test_load(self, sample_document_file):
        assert len(load_elements_file(sample_document_file)) == 3

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_elements_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(DocumentFormatError, match="Invalid JSON"):
            load_elements_file(path)
