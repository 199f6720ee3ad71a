import pytest

from kontent_model_generator.codegen.core.config import GeneratorConfig
from kontent_model_generator.codegen.core.index import SchemaIndex, UnresolvedReferenceError
from kontent_model_generator.codegen.core.schema import parse_snapshot
from kontent_model_generator.codegen.languages.typescript.naming import create_name_resolver
from kontent_model_generator.codegen.languages.typescript.references import (
    ReferenceDescriptor,
    ReferenceResolver,
)

from conftest import (
    content_type,
    element,
    linked_items,
    raw_snapshot,
    snippet_element,
    taxonomy,
    taxonomy_element,
)


def _resolver(data, **config):
    index = SchemaIndex.from_snapshot(parse_snapshot(data))
    names = create_name_resolver(index, GeneratorConfig(**config))
    return ReferenceResolver(index, names), index


def test_statement_rendering():
    descriptor = ReferenceDescriptor("Actor", "./actor")

    assert descriptor.statement() == "import { type Actor } from './actor';"
    assert descriptor.statement('"') == 'import { type Actor } from "./actor";'


def test_taxonomy_reference(movie_snapshot):
    index = SchemaIndex.from_snapshot(movie_snapshot)
    resolver = ReferenceResolver(index, create_name_resolver(index, GeneratorConfig()))

    references = resolver.compute_references(index.content_type("c1"))

    assert references.imports == (ReferenceDescriptor("Genres", "../taxonomies/genres"),)
    assert references.snippet_extensions == ()


def test_no_self_import():
    resolver, index = _resolver(
        raw_snapshot(
            types=[content_type("c1", "article", [linked_items("e1", "related", ["c1"])])]
        )
    )

    assert resolver.compute_references(index.content_type("c1")).imports == ()


def test_each_target_imported_once():
    resolver, index = _resolver(
        raw_snapshot(
            types=[
                content_type(
                    "c1",
                    "book",
                    [
                        linked_items("e1", "author", ["c2"]),
                        linked_items("e2", "editor", ["c2"]),
                        linked_items("e3", "illustrator", ["c2"], type="subpages"),
                    ],
                ),
                content_type("c2", "person"),
            ]
        )
    )

    references = resolver.compute_references(index.content_type("c1"))

    assert references.imports == (ReferenceDescriptor("Person", "./person"),)


def test_imports_sorted_by_statement():
    resolver, index = _resolver(
        raw_snapshot(
            types=[
                content_type(
                    "c1",
                    "movie",
                    [
                        linked_items("e1", "director", ["c3"]),
                        linked_items("e2", "cast", ["c2"]),
                        taxonomy_element("e3", "genre", "t1"),
                        snippet_element("e4", "seo", "s1"),
                    ],
                ),
                content_type("c2", "actor"),
                content_type("c3", "director"),
            ],
            snippets=[content_type("s1", "seo", [element("e5", "meta_title")])],
            taxonomies=[taxonomy("t1", "genres")],
        )
    )

    references = resolver.compute_references(index.content_type("c1"))

    assert [r.statement() for r in references.imports] == [
        "import { type Actor } from './actor';",
        "import { type Director } from './director';",
        "import { type Genres } from '../taxonomies/genres';",
        "import { type Seo } from '../content-type-snippets/seo';",
    ]
    assert references.snippet_extensions == ("Seo",)


def test_empty_allow_list_adds_no_import():
    resolver, index = _resolver(
        raw_snapshot(types=[content_type("c1", "page", [linked_items("e1", "children", [])])])
    )

    assert resolver.compute_references(index.content_type("c1")).imports == ()


def test_dropped_field_drops_its_import():
    data = raw_snapshot(
        types=[
            content_type(
                "c1",
                "post",
                [element("e1", "title"), linked_items("e2", "author", ["c2"])],
            ),
            content_type("c2", "person"),
        ]
    )
    resolver, index = _resolver(
        data, element_resolver=lambda e: None if e.codename == "author" else e.codename
    )

    references = resolver.compute_references(index.content_type("c1"))

    assert references.imports == ()
    assert [e.mapped_name for e in references.elements if e.is_field] == ["title"]


def test_unknown_snippet_is_fatal():
    resolver, index = _resolver(
        raw_snapshot(types=[content_type("c1", "page", [snippet_element("e1", "seo", "missing")])])
    )

    with pytest.raises(UnresolvedReferenceError, match="content type snippet with id 'missing'"):
        resolver.compute_references(index.content_type("c1"))


def test_extension_module_style():
    resolver, index = _resolver(
        raw_snapshot(
            types=[
                content_type("c1", "movie", [linked_items("e1", "cast", ["c2"])]),
                content_type("c2", "actor"),
            ]
        ),
        module_style="extension",
    )

    references = resolver.compute_references(index.content_type("c1"))

    assert references.imports[0].file_path == "./actor.js"
