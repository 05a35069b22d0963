"""Validation kernel: field schema, type matcher and validators."""
