"""
brewtracker.domain — Canonical data models and enumerations.

This package defines the source-of-truth types shared across every layer
of the ID normalization engine. Nothing in here should import from
other brewtracker sub-packages (only stdlib / third-party Pydantic).
"""
