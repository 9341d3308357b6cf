"""
Native type catalog.
"""

from .types import DB2_NATIVE_TYPES, AbstractType, DB2TypeCatalog, TypeCatalog, normalize_type_name

__all__ = ["AbstractType", "DB2_NATIVE_TYPES", "DB2TypeCatalog", "TypeCatalog", "normalize_type_name"]
