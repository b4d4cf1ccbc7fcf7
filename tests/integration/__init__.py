"""
arrayschema — integration test package marker.

Purpose
- End-to-end validation through the public API, the document loader and
  configured logging; no network access.
"""
