"""
File-level conversion of JSON documents.
"""
from converter.json_converter import JsonConverter

__all__ = ["JsonConverter"]
