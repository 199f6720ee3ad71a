"""
Formatting of generated TypeScript source.

Re-indents rendered templates by bracket depth, lays out doc comments
and normalizes blank lines so output is stable and diff-friendly.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional


OPENERS = "{[("
CLOSERS = "}])"


@dataclass(frozen=True)
class FormatOptions:
    """Formatter settings; defaults match the generator's house style."""

    indent_size: int = 4
    use_tabs: bool = False
    single_quote: bool = True
    line_ending: str = "\n"
    max_blank_lines: int = 1

    @property
    def indent(self) -> str:
        return "\t" if self.use_tabs else " " * self.indent_size

    @property
    def quote(self) -> str:
        return "'" if self.single_quote else '"'

    @classmethod
    def from_dict(cls, options: Dict[str, Any]) -> "FormatOptions":
        """Build options from a config dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in options.items() if k in known})


class CodeFormatter:
    """Pretty-printer for the small TypeScript subset the templates produce."""

    def __init__(self, options: Optional[FormatOptions] = None):
        self.options = options or FormatOptions()

    def format_code(self, code: str) -> str:
        """
        Format generated code.

        Args:
            code: Raw rendered code

        Returns:
            Formatted code ending with exactly one line ending
        """
        lines: List[str] = []
        depth = 0
        blank_count = 0

        for raw_line in code.replace("\r\n", "\n").split("\n"):
            line = raw_line.strip()

            if not line:
                blank_count += 1
                # No blank lines at the start of a block or file
                if lines and not _opens_block(lines[-1]) and blank_count <= self.options.max_blank_lines:
                    lines.append("")
                continue
            blank_count = 0

            if _is_comment(line):
                prefix = " " if line.startswith("*") else ""
                lines.append(self.options.indent * depth + prefix + line)
                continue

            leading_closers = len(line) - len(line.lstrip(CLOSERS))
            opened, closed = _count_brackets(line)
            depth = max(depth - leading_closers, 0)

            # Drop blank lines right before a closing bracket
            if leading_closers and lines and lines[-1] == "":
                lines.pop()

            lines.append(self.options.indent * depth + line)
            depth = max(depth + opened - (closed - leading_closers), 0)

        while lines and lines[-1] == "":
            lines.pop()

        return self.options.line_ending.join(lines) + self.options.line_ending


def _is_comment(line: str) -> bool:
    return line.startswith(("/*", "*", "//"))


def _opens_block(line: str) -> bool:
    stripped = line.rstrip()
    return bool(stripped) and stripped[-1] in OPENERS and not _is_comment(stripped.lstrip())


def _count_brackets(line: str):
    """Count opening and closing brackets outside string literals."""
    opened = closed = 0
    quote = None
    escaped = False

    for char in line:
        if quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue

        if char in "'\"`":
            quote = char
        elif char in OPENERS:
            opened += 1
        elif char in CLOSERS:
            closed += 1

    return opened, closed
