"""Publish WebXR game builds to heyVR."""

__version__ = "1.0.0"
