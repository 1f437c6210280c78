"""
Admission core: decode, dispatch and translate.

Exports the decoder, the validator capability and the validating handler
that ties them together.
"""

from .decoder import Decoder
from .handler import ValidatingHandler
from .validator import CustomValidator, Validator

__all__ = [
    "Decoder",
    "ValidatingHandler",
    "Validator",
    "CustomValidator",
]
