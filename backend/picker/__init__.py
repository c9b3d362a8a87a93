from .dimensions import extract_dimensions
from .state import advance, adjust_qty, back, create_picker, move_choice, retain_if_visible, stage_choices

__all__ = [
    "advance",
    "adjust_qty",
    "back",
    "create_picker",
    "extract_dimensions",
    "move_choice",
    "retain_if_visible",
    "stage_choices",
]
