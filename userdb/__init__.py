"""
User database merging.

Merges tab-delimited user database snapshots into a single deduplicated,
key-sorted file, keeping the highest-confidence record per key.
"""

__version__ = "0.1.0"
