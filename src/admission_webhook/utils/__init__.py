"""Shared helpers for the admission webhook."""
