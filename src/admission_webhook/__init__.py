"""
Admission Webhook - the request-handling core of a validating admission webhook.

This package provides:
- Decoding of raw admission payloads into typed pydantic resources
- Dispatch of CREATE, UPDATE and DELETE requests to pluggable validators
- Translation of validator outcomes into Kubernetes-style admission responses
"""

__version__ = "0.1.0"
