from datetime import datetime, timezone

import pytest

from kontent_model_generator import __version__
from kontent_model_generator.codegen.core.formatting import CodeFormatter, FormatOptions
from kontent_model_generator.codegen.core.generator import EntityProcessingError
from kontent_model_generator.codegen.core.index import UnresolvedReferenceError
from kontent_model_generator.codegen.languages.typescript.emitter import format_timestamp

from conftest import (
    content_type,
    element,
    linked_items,
    raw_snapshot,
    snippet_element,
    taxonomy,
)

NOTE = f"Generated by 'kontent-model-generator@{__version__}'"


def test_movie_with_taxonomy(make_emitter, movie_data):
    emitter, index, _ = make_emitter(movie_data)

    emitted = emitter.emit_entity(index.content_type("c1"))

    assert emitted.file_path == "content-types/movie.ts"
    assert emitted.code == (
        "import { type IContentItem, type Elements } from '@kontent-ai/delivery-sdk';\n"
        "\n"
        "import { type Genres } from '../taxonomies/genres';\n"
        "\n"
        "/**\n"
        f" * {NOTE}\n"
        " *\n"
        " * Movie\n"
        " * Id: c1\n"
        " * Codename: movie\n"
        " */\n"
        "export type Movie = IContentItem<{\n"
        "    /**\n"
        "     * Genre (taxonomy)\n"
        "     * Required: false\n"
        "     * Id: e1\n"
        "     * Codename: genre\n"
        "     */\n"
        "    genre: Elements.TaxonomyElement<Genres>;\n"
        "}>;\n"
    )


def test_taxonomy_type(make_emitter, movie_data):
    emitter, index, _ = make_emitter(movie_data)

    emitted = emitter.emit_taxonomy(index.taxonomy("t1"))

    assert emitted.file_path == "taxonomies/genres.ts"
    assert emitted.code.endswith("export type Genres = 'action' | 'comedy';\n")
    assert " * Codename: genres\n" in emitted.code


def test_taxonomy_without_terms(make_emitter):
    emitter, index, _ = make_emitter(raw_snapshot(taxonomies=[taxonomy("t1", "tags")]))

    code = emitter.emit_taxonomy(index.taxonomy("t1")).code

    assert code.endswith("export type Tags = never;\n")


def test_fields_in_alphabetical_order(make_emitter):
    emitter, index, _ = make_emitter(
        raw_snapshot(
            types=[
                content_type(
                    "c1",
                    "fruit",
                    [element("e1", "zebra"), element("e2", "apple"), element("e3", "mango")],
                )
            ]
        )
    )

    code = emitter.emit_entity(index.content_type("c1")).code

    assert code.index("apple:") < code.index("mango:") < code.index("zebra:")
    # Fields are separated by one blank line
    assert "    apple: Elements.TextElement;\n\n    /**" in code


def test_field_comment_details(make_emitter):
    emitter, index, _ = make_emitter(
        raw_snapshot(
            types=[
                content_type(
                    "c1",
                    "article",
                    [
                        element(
                            "e1",
                            "title",
                            is_required=True,
                            guidelines="First line\r\nsecond line with */ inside",
                        )
                    ],
                )
            ]
        )
    )

    code = emitter.emit_entity(index.content_type("c1")).code

    assert (
        "    /**\n"
        "     * Title (text)\n"
        "     * Required: true\n"
        "     * Id: e1\n"
        "     * Codename: title\n"
        "     *\n"
        "     * First line second line with *\\/ inside\n"
        "     */\n"
        "    title: Elements.TextElement;\n"
    ) in code


def test_self_reference_is_not_imported(make_emitter):
    emitter, index, _ = make_emitter(
        raw_snapshot(types=[content_type("c1", "article", [linked_items("e1", "related", ["c1"])])])
    )

    code = emitter.emit_entity(index.content_type("c1")).code

    assert "related: Elements.LinkedItemsElement<Article>;" in code
    assert "from './article'" not in code


def test_repeated_reference_imported_once(make_emitter):
    emitter, index, _ = make_emitter(
        raw_snapshot(
            types=[
                content_type(
                    "c1",
                    "book",
                    [
                        linked_items("e1", "author", ["c2"]),
                        linked_items("e2", "editor", ["c2"]),
                        linked_items("e3", "reviewer", ["c2"]),
                    ],
                ),
                content_type("c2", "person"),
            ]
        )
    )

    code = emitter.emit_entity(index.content_type("c1")).code

    assert code.count("import { type Person } from './person';") == 1


def test_empty_allow_list(make_emitter):
    emitter, index, _ = make_emitter(
        raw_snapshot(types=[content_type("c1", "page", [linked_items("e1", "children", [])])])
    )

    code = emitter.emit_entity(index.content_type("c1")).code

    assert "children: Elements.LinkedItemsElement<IContentItem>;" in code
    assert code.count("import ") == 1


def test_snippet_extension(make_emitter):
    data = raw_snapshot(
        types=[content_type("c1", "article", [snippet_element("e1", "seo", "s1")])],
        snippets=[content_type("s1", "seo", [element("e2", "title")], name="SEO")],
    )
    emitter, index, _ = make_emitter(data)

    article = emitter.emit_entity(index.content_type("c1")).code
    snippet = emitter.emit_entity(index.snippet("s1"))

    assert "export type Article = IContentItem<{}> & Seo;" in article
    assert "import { type Seo } from '../content-type-snippets/seo';" in article
    # No fields of its own, so the Elements namespace is not imported
    assert "import { type IContentItem } from '@kontent-ai/delivery-sdk';" in article
    assert "title" not in article

    assert snippet.file_path == "content-type-snippets/seo.ts"
    assert "     * From snippet: SEO\n     * Snippet codename: seo\n" in snippet.code


def test_field_resolver_returning_none(make_emitter):
    from kontent_model_generator.codegen.core.config import GeneratorConfig

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
    config = GeneratorConfig(
        element_resolver=lambda e: None if e.codename == "author" else e.codename
    )
    emitter, index, _ = make_emitter(data, config)

    code = emitter.emit_entity(index.content_type("c1")).code

    assert "title: Elements.TextElement;" in code
    assert "author" not in code
    assert "Person" not in code


def test_generation_note_with_timestamp(make_emitter, movie_data):
    moment = datetime(2022, 5, 18, 9, 48, 4, tzinfo=timezone.utc)
    emitter, index, _ = make_emitter(movie_data, add_timestamp=True, now=lambda: moment)

    code = emitter.emit_entity(index.content_type("c1")).code

    assert f" * {NOTE} at 'Wed, 18 May 2022 09:48:04 GMT'\n" in code


def test_format_timestamp_converts_to_utc():
    moment = datetime(2022, 5, 18, 9, 48, 4, tzinfo=timezone.utc)

    assert format_timestamp(moment) == "Wed, 18 May 2022 09:48:04 GMT"


def test_emission_is_deterministic(make_emitter, movie_data):
    first, index_a, _ = make_emitter(movie_data)
    second, index_b, _ = make_emitter(movie_data)

    assert (
        first.emit_entity(index_a.content_type("c1")).code
        == second.emit_entity(index_b.content_type("c1")).code
    )


def test_format_options_override(make_emitter, movie_data):
    formatter = CodeFormatter(FormatOptions(indent_size=2, single_quote=False))
    emitter, index, _ = make_emitter(movie_data, formatter=formatter)

    code = emitter.emit_entity(index.content_type("c1")).code

    assert 'from "@kontent-ai/delivery-sdk";' in code
    assert 'import { type Genres } from "../taxonomies/genres";' in code
    assert "\n  genre: Elements.TaxonomyElement<Genres>;\n" in code


def test_failures_are_wrapped_with_entity_identity(make_emitter):
    emitter, index, _ = make_emitter(
        raw_snapshot(types=[content_type("c1", "page", [linked_items("e1", "related", ["gone"])])])
    )

    with pytest.raises(EntityProcessingError) as excinfo:
        emitter.emit_entity(index.content_type("c1"))

    error = excinfo.value
    assert str(error).startswith("Failed to process content type 'page' (Page)")
    assert isinstance(error.cause, UnresolvedReferenceError)
    assert error.__cause__ is error.cause
