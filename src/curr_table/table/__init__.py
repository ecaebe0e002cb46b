"""Conversion table assembly and rendering."""

from .builder import (
    TableRequest,
    build_rows,
    build_table,
    parse_amount,
    render_table,
    split_arguments,
)

__all__ = [
    "TableRequest",
    "build_rows",
    "build_table",
    "parse_amount",
    "render_table",
    "split_arguments",
]
