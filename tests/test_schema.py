import pytest

from kontent_model_generator.codegen.core.schema import (
    ElementKind,
    GuidelinesElement,
    LinkedItemsElement,
    SchemaError,
    SnippetElement,
    SubpagesElement,
    TaxonomyElement,
    parse_element,
    parse_snapshot,
    parse_taxonomy,
)

from conftest import content_type, element, linked_items, raw_snapshot, snippet_element, taxonomy_element


def test_scalar_element_keeps_common_fields():
    parsed = parse_element(
        element("e1", "title", "text", name="Title", is_required=True, guidelines="Keep it short")
    )

    assert parsed.kind == ElementKind.TEXT
    assert parsed.codename == "title"
    assert parsed.required is True
    assert parsed.guidelines == "Keep it short"
    assert parsed.raw_type == "text"


def test_linked_items_and_subpages_carry_allow_list():
    items = parse_element(linked_items("e1", "related", ["a", "b"]))
    pages = parse_element(linked_items("e2", "pages", ["a"], type="subpages"))

    assert isinstance(items, LinkedItemsElement)
    assert items.allowed_content_types == ("a", "b")
    assert isinstance(pages, SubpagesElement)
    assert pages.kind == ElementKind.SUBPAGES


def test_reference_payloads():
    tax = parse_element(taxonomy_element("e1", "genre", "t1"))
    snip = parse_element(snippet_element("e2", "seo", "s1"))
    guide = parse_element(element("e3", "notes", "guidelines", guidelines="Read me"))

    assert isinstance(tax, TaxonomyElement) and tax.taxonomy_group_id == "t1"
    assert isinstance(snip, SnippetElement) and snip.snippet_id == "s1"
    assert isinstance(guide, GuidelinesElement)


def test_unknown_element_type_is_not_an_error():
    parsed = parse_element(element("e1", "widget", "ai_widget"))

    assert parsed.kind == ElementKind.UNKNOWN
    assert parsed.raw_type == "ai_widget"


def test_missing_id_raises_schema_error():
    with pytest.raises(SchemaError, match="Missing id for element 'title'"):
        parse_element({"codename": "title", "type": "text"})


def test_taxonomy_terms_flatten_depth_first():
    group = parse_taxonomy(
        {
            "id": "t1",
            "codename": "genres",
            "name": "Genres",
            "terms": [
                {
                    "id": "1",
                    "codename": "drama",
                    "name": "Drama",
                    "terms": [{"id": "2", "codename": "crime", "name": "Crime", "terms": []}],
                },
                {"id": "3", "codename": "comedy", "name": "Comedy", "terms": []},
            ],
        }
    )

    assert [t.codename for t in group.flatten_terms()] == ["drama", "crime", "comedy"]


def test_parse_snapshot_builds_all_lists():
    snapshot = parse_snapshot(
        raw_snapshot(
            types=[content_type("c1", "movie", [element("e1", "title")])],
            snippets=[content_type("s1", "seo")],
        )
    )

    assert [t.codename for t in snapshot.types] == ["movie"]
    assert [s.codename for s in snapshot.snippets] == ["seo"]
    assert snapshot.taxonomies == ()
    assert snapshot.types[0].get_element("e1").codename == "title"


def test_parse_snapshot_rejects_non_objects():
    with pytest.raises(SchemaError):
        parse_snapshot([])


def test_parse_snapshot_rejects_entries_that_are_not_objects():
    with pytest.raises(SchemaError, match="Expected an object for content type, got str"):
        parse_snapshot(raw_snapshot(types=["oops"]))


def test_nested_entries_that_are_not_objects_raise_schema_error():
    with pytest.raises(SchemaError, match="Expected an object for element"):
        parse_snapshot(raw_snapshot(snippets=[content_type("s1", "seo", [42])]))

    with pytest.raises(SchemaError, match="Expected an object for taxonomy term"):
        parse_taxonomy({"id": "t1", "codename": "genres", "terms": [None]})
