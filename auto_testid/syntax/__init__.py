"""Source text adapters: tree-sitter based parsing and span-preserving printing."""

from auto_testid.syntax.parser import dialect_for_path, parse_file, parse_source
from auto_testid.syntax.printer import print_program, render_attribute

__all__ = ["dialect_for_path", "parse_file", "parse_source", "print_program", "render_attribute"]
