from .menu import extract_menu_categories
from .pipeline import extract_variant_options

__all__ = ["extract_menu_categories", "extract_variant_options"]
