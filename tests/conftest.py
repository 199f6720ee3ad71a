import json
from pathlib import Path

import pytest

from kontent_model_generator.codegen.core.config import GeneratorConfig
from kontent_model_generator.codegen.core.index import SchemaIndex
from kontent_model_generator.codegen.core.schema import parse_snapshot
from kontent_model_generator.codegen.core.templates import create_template_engine
from kontent_model_generator.codegen.languages.typescript.emitter import ModelEmitter
from kontent_model_generator.codegen.languages.typescript.naming import create_name_resolver

TEMPLATE_DIR = (
    Path(__file__).resolve().parent.parent
    / "kontent_model_generator"
    / "codegen"
    / "languages"
    / "typescript"
    / "templates"
)


def element(id, codename, type="text", name=None, **payload):
    """Raw Management API element."""
    data = {
        "id": id,
        "codename": codename,
        "type": type,
        "name": name or codename.replace("_", " ").title(),
    }
    data.update(payload)
    return data


def linked_items(id, codename, allowed=(), type="modular_content", **payload):
    return element(
        id,
        codename,
        type=type,
        allowed_content_types=[{"id": a} for a in allowed],
        **payload,
    )


def taxonomy_element(id, codename, group_id, **payload):
    return element(id, codename, type="taxonomy", taxonomy_group={"id": group_id}, **payload)


def snippet_element(id, codename, snippet_id, **payload):
    return element(id, codename, type="snippet", snippet={"id": snippet_id}, **payload)


def content_type(id, codename, elements=(), name=None):
    return {
        "id": id,
        "codename": codename,
        "name": name or codename.replace("_", " ").title(),
        "elements": list(elements),
    }


def taxonomy(id, codename, terms=(), name=None):
    return {
        "id": id,
        "codename": codename,
        "name": name or codename.title(),
        "terms": [
            {"id": f"{id}-{t}", "codename": t, "name": t.title(), "terms": []}
            for t in terms
        ],
    }


def raw_snapshot(types=(), snippets=(), taxonomies=()):
    return {
        "types": list(types),
        "snippets": list(snippets),
        "taxonomies": list(taxonomies),
    }


@pytest.fixture
def movie_data():
    """One taxonomy group and one content type using it."""
    return raw_snapshot(
        types=[
            content_type(
                "c1",
                "movie",
                [taxonomy_element("e1", "genre", "t1")],
            )
        ],
        taxonomies=[taxonomy("t1", "genres", ["comedy", "action"])],
    )


@pytest.fixture
def movie_snapshot(movie_data):
    return parse_snapshot(movie_data)


@pytest.fixture
def make_emitter():
    """Factory building an emitter for a raw snapshot."""

    def _make(data, config=None, **kwargs):
        snapshot = parse_snapshot(data)
        index = SchemaIndex.from_snapshot(snapshot)
        names = create_name_resolver(index, config or GeneratorConfig())
        emitter = ModelEmitter(index, names, create_template_engine(TEMPLATE_DIR), **kwargs)
        return emitter, index, names

    return _make


@pytest.fixture
def snapshot_file(tmp_path, movie_data):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(movie_data), encoding="utf-8")
    return path
