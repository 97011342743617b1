"""List tables that accept bulk actions."""

from .adapters import ObjectTable, TableBinding, TableSpec, resolve_table

__all__ = ["ObjectTable", "TableBinding", "TableSpec", "resolve_table"]
