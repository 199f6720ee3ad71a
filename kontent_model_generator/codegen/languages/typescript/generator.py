"""
Delivery SDK model generator.

Generates TypeScript models for @kontent-ai/delivery-sdk from a schema
snapshot: snippets first, then content types, then taxonomies and barrels.
"""

from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional

from ...core.generator import CodeGenerator, GenerationResult
from ...core.index import SchemaIndex
from ...core.naming import NameResolver
from ...core.schema import ElementKind, ElementGroup, SchemaSnapshot
from ....logging_config import get_logger
from .barrel import BarrelEmitter
from .emitter import EmittedFile, ModelEmitter
from .naming import create_name_resolver

logger = get_logger(__name__)


class DeliveryModelGenerator(CodeGenerator):
    """Code generator for Delivery SDK content type models."""

    @property
    def sdk_name(self) -> str:
        return "delivery"

    @property
    def file_extension(self) -> str:
        return ".ts"

    def get_template_directory(self) -> Optional[Path]:
        """Return the TypeScript templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def create_emitter(self, index: SchemaIndex, names: NameResolver) -> ModelEmitter:
        return ModelEmitter(
            index,
            names,
            self.template_engine,
            self.formatter,
            add_timestamp=self.config.add_timestamp,
        )

    def generate(self, snapshot: SchemaSnapshot) -> GenerationResult:
        """
        Generate and write all model files of a snapshot.

        Errors are not caught; the first failing entity aborts the run.
        """
        index = SchemaIndex.from_snapshot(snapshot)
        names = create_name_resolver(index, self.config)
        emitter = self.create_emitter(index, names)
        output_dir = Path(self.config.output_dir)

        for target, strategy in names.strategies.non_default().items():
            self.reporter.on_resolver_used(target.replace("_", " "), strategy)

        result = GenerationResult(
            metadata={
                "sdk": self.sdk_name,
                "project_id": self.config.project_id,
                "module_style": names.module_style.value,
            }
        )
        # Module file names per folder, for barrels
        folders: Dict[str, List[str]] = defaultdict(list)

        logger.info(
            "Generating models for %d snippets and %d types",
            len(index.snippets),
            len(index.types),
        )

        # Types extend snippets, so snippets go first
        for snippet in index.snippets:
            self.reporter.on_entity_start("content type snippet", snippet)
            emitted = emitter.emit_entity(snippet)
            result.snippet_filenames.append(self._write(output_dir, emitted))
            folders[names.folder(snippet)].append(names.module_file_name(snippet))
            result.warnings.extend(self._warnings(snippet, "Snippet"))

        for content_type in index.types:
            self.reporter.on_entity_start("content type", content_type)
            emitted = emitter.emit_entity(content_type)
            result.content_type_filenames.append(self._write(output_dir, emitted))
            folders[names.folder(content_type)].append(names.module_file_name(content_type))
            result.warnings.extend(self._warnings(content_type, "Content type"))

        if self.config.generate_taxonomies:
            for taxonomy in index.taxonomies:
                self.reporter.on_entity_start("taxonomy group", taxonomy)
                emitted = emitter.emit_taxonomy(taxonomy)
                result.taxonomy_filenames.append(self._write(output_dir, emitted))
                folders[names.folder(taxonomy)].append(names.module_file_name(taxonomy))

        if self.config.generate_barrels:
            result.barrel_filenames = self._write_barrels(output_dir, names, folders)

        result.metadata.update(
            {
                "content_types": len(result.content_type_filenames),
                "snippets": len(result.snippet_filenames),
                "taxonomies": len(result.taxonomy_filenames),
            }
        )
        logger.info("Generated %d files", len(result.filenames) + len(result.barrel_filenames))
        return result

    def _write_barrels(self, output_dir: Path, names: NameResolver,
                       folders: Dict[str, List[str]]) -> List[str]:
        barrels = BarrelEmitter(
            self.template_engine,
            self.formatter,
            module_style=names.module_style,
            file_extension=self.file_extension,
            import_extension=names.import_extension,
        )

        written = []
        for folder in sorted(f for f in folders if f):
            written.append(self._write(output_dir, barrels.emit_folder(folder, folders[folder])))

        # Models without a folder are exported from the root barrel directly
        root = barrels.emit_root(folders, folders.get("", ()))
        written.append(self._write(output_dir, root))
        return written

    def _write(self, output_dir: Path, emitted: EmittedFile) -> str:
        path = output_dir / emitted.file_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(emitted.code)

        filename = str(path)
        logger.debug("Wrote %s", filename)
        self.reporter.on_file_written(filename)
        return filename

    def _warnings(self, owner: ElementGroup, label: str) -> List[str]:
        warnings = []
        for element in owner.elements:
            if element.kind == ElementKind.UNKNOWN:
                warnings.append(
                    f"{label} '{owner.codename}': skipped element '{element.codename}' "
                    f"of unsupported type '{element.raw_type}'"
                )
        if not any(
            e.kind not in (ElementKind.SNIPPET, ElementKind.GUIDELINES, ElementKind.UNKNOWN)
            for e in owner.elements
        ):
            warnings.append(f"{label} '{owner.codename}' declares no fields")
        return warnings
