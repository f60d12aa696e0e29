"""
app/validators package marker.
"""

from app.validators.field_validators import VALID_CHANNELS, VALID_STAGES, FieldValidator

__all__ = [
    "FieldValidator",
    "VALID_CHANNELS",
    "VALID_STAGES",
]
