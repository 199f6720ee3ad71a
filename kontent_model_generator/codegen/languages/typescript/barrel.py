"""Barrel (index.ts) files re-exporting generated models."""

import posixpath
from typing import Iterable, List, Optional

from ...core.formatting import CodeFormatter
from ...core.naming import ModuleStyle
from ...core.templates import TemplateEngine
from .emitter import EmittedFile

BARREL_TEMPLATE = "barrel.ts.j2"
BARREL_NAME = "index"


class BarrelEmitter:
    """Creates one barrel per model folder and one at the output root."""

    def __init__(self, template_engine: TemplateEngine, formatter: Optional[CodeFormatter] = None,
                 module_style: ModuleStyle = ModuleStyle.BARE,
                 file_extension: str = ".ts", import_extension: str = ".js"):
        self.template_engine = template_engine
        self.formatter = formatter or CodeFormatter()
        self.module_style = module_style
        self.file_extension = file_extension
        self.import_extension = import_extension

    def module_specifier(self, module_path: str) -> str:
        """'content-types/movie.ts' -> './content-types/movie' (or '.js' form)."""
        if module_path.endswith(self.file_extension):
            module_path = module_path[: -len(self.file_extension)]
        specifier = f"./{module_path}"
        if self.module_style == ModuleStyle.EXTENSION:
            specifier += self.import_extension
        return specifier

    def emit_folder(self, folder: str, module_file_names: Iterable[str]) -> EmittedFile:
        """Barrel exporting every model file of one folder."""
        modules = sorted(
            self.module_specifier(name)
            for name in set(module_file_names)
            if name != f"{BARREL_NAME}{self.file_extension}"
        )
        return self._emit(posixpath.join(folder, self._file_name()), modules)

    def emit_root(self, folders: Iterable[str], module_file_names: Iterable[str] = ()) -> EmittedFile:
        """
        Barrel at the output root.

        Args:
            folders: Folders whose barrels are re-exported
            module_file_names: Model files placed directly in the output root
        """
        modules = {
            self.module_specifier(posixpath.join(folder, self._file_name()))
            for folder in folders
            if folder
        }
        modules.update(
            self.module_specifier(name)
            for name in module_file_names
            if name != self._file_name()
        )
        return self._emit(self._file_name(), sorted(modules))

    def _file_name(self) -> str:
        return f"{BARREL_NAME}{self.file_extension}"

    def _emit(self, file_path: str, modules: List[str]) -> EmittedFile:
        code = self.template_engine.render_template(
            BARREL_TEMPLATE,
            {"modules": modules, "quote": self.formatter.options.quote},
        )
        if not modules:
            code = "export {};\n"
        return EmittedFile(self.formatter.format_code(code), file_path)
