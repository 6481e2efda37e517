"""
Adapters module - I/O surfaces.

Adapters are thin wrappers over compiler + runtime.
They do no synthesis and no kit logic - only sessions, files and I/O.
"""

from bitvox.adapters.api import Config, KitExport, KitStudio
from bitvox.adapters.kit_validator import KitValidation, slices_from_filename, validate_kit

__all__ = [
    "KitStudio",
    "KitExport",
    "Config",
    # Validation
    "validate_kit",
    "KitValidation",
    "slices_from_filename",
]
