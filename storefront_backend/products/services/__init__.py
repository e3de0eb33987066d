from .catalog_resolver import resolve_line, resolve_lines
from .inventory_guard import delete_product, delete_variant, sync_variants

__all__ = [
    "resolve_line",
    "resolve_lines",
    "delete_product",
    "delete_variant",
    "sync_variants",
]
