"""Capture module."""

from .encoder import encode_file, encode_recording, from_base64, from_data_uri, kind_for_mime

__all__ = ["encode_file", "encode_recording", "from_base64", "from_data_uri", "kind_for_mime"]
