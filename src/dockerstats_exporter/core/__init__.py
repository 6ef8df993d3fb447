"""Parsing, unit conversion and domain models."""
