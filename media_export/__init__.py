"""
Media Export

Exports media assets (binary content plus a JSON metadata sidecar) from the
asset repository to a directory, filtered by asset source and tags.
"""

__version__ = "1.0.0"
