"""
Transport bridges for the admission handler.

The admission core is transport agnostic. This package wires a
ValidatingHandler into Kopf's built-in admission webhook server, which takes
care of HTTPS serving, certificates and AdmissionReview framing.
"""

from .kopf_adapter import build_request, register_validating_webhook

__all__ = ["build_request", "register_validating_webhook"]
