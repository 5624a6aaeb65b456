"""
High-level dashboard operations.
"""

from inspovid.operations.add_video import (
    AddVideoRequest,
    add_video,
    fetch_metadata,
    resolve_or_placeholder,
)

__all__ = [
    "AddVideoRequest",
    "add_video",
    "fetch_metadata",
    "resolve_or_placeholder",
]
