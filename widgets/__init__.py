from .header import Header
from .instructions_panel import InstructionsPanel

__all__ = [
    "Header",
    "InstructionsPanel",
]
