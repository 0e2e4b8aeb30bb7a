"""
Render bridges for dockscreen.

This package contains reference bridge implementations; engine-specific
bridges live in the applications that use them.
"""

from .recording import RecordingBridge

__all__ = [
    "RecordingBridge",
]
