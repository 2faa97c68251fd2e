"""Library utilities for tourmap.

This package contains integration modules for external libraries.
"""

from tourmap.lib.nx import to_networkx

__all__ = ["to_networkx"]
