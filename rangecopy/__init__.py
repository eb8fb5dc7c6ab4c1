"""
rangecopy - copy a byte range from one file into another at any offset.

A small tool similar to the useful parts of ``dd``, without block sizes,
conversions or surprising truncation.
"""

__version__ = "0.1.0"
