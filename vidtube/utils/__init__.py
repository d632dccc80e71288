"""Utility helpers for the VidTube backend.

Submodules:
- aws: S3 client wrapper used by the media relay
- validation_utils: shared input and ownership checks
"""

__all__: list[str] = []
