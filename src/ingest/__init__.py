"""Score log ingestion.

This module reads raw score logs and parses each line into a tagged
record without failing on malformed input.
"""
