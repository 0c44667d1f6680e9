#!/usr/bin/env python3
"""
artpick Exception Classes
"""

class ArtpickError(Exception):
    """Base exception for artpick errors"""
    pass

class InvalidPrefixInput(ArtpickError, ValueError):
    """Raised when a "select first N" value is not a positive integer"""
    pass

class SelectionInvariantError(ArtpickError, AssertionError):
    """Raised when the selection state breaks one of its invariants"""
    pass

class ArtworksAPIError(ArtpickError):
    """Raised when a page of artworks cannot be fetched or parsed"""
    pass
