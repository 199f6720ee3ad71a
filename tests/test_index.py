import pytest

from kontent_model_generator.codegen.core.index import SchemaIndex, UnresolvedReferenceError
from kontent_model_generator.codegen.core.schema import SchemaError, parse_snapshot

from conftest import content_type, raw_snapshot, taxonomy


def test_lookups_return_entities(movie_snapshot):
    index = SchemaIndex.from_snapshot(movie_snapshot)

    assert index.content_type("c1").codename == "movie"
    assert index.taxonomy("t1").codename == "genres"


def test_missing_id_raises_unresolved_reference(movie_snapshot):
    index = SchemaIndex.from_snapshot(movie_snapshot)

    with pytest.raises(UnresolvedReferenceError) as excinfo:
        index.content_type("nope", referenced_by="element 'related'")

    assert excinfo.value.entity_id == "nope"
    assert "content type with id 'nope'" in str(excinfo.value)
    assert "element 'related'" in str(excinfo.value)


def test_snippet_and_taxonomy_lookups_fail_loudly():
    index = SchemaIndex()

    with pytest.raises(UnresolvedReferenceError):
        index.snippet("s1")
    with pytest.raises(UnresolvedReferenceError):
        index.taxonomy("t1")


def test_duplicate_ids_are_rejected():
    snapshot = parse_snapshot(
        raw_snapshot(types=[content_type("c1", "movie"), content_type("c1", "actor")])
    )

    with pytest.raises(SchemaError, match="Duplicate content type id 'c1'"):
        SchemaIndex.from_snapshot(snapshot)


def test_index_is_read_only():
    index = SchemaIndex.from_snapshot(
        parse_snapshot(raw_snapshot(taxonomies=[taxonomy("t1", "genres")]))
    )

    with pytest.raises(TypeError):
        index._taxonomy_map["t2"] = None
