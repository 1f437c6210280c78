"""
Tests package - test suite for the admission webhook.

Contains:
- unit/: Unit tests for individual components
- fixtures/: Sample resources and a recording fake validator
"""
