"""
py-hexmap: hex-grid province map and scenario generator.
"""

__version__ = "0.1.0"
