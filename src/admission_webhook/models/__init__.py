"""
Models package - Pydantic models for type-safe admission handling.

Defines data models for:
- Typed resources decoded from admission payloads
- AdmissionReview requests and responses
- Validation outcomes
"""
