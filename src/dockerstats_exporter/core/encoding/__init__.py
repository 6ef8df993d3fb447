"""Encoders for exported metrics."""

from dockerstats_exporter.core.encoding.prometheus import CONTENT_TYPE, encode_readings

__all__ = ["CONTENT_TYPE", "encode_readings"]
