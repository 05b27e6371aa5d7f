#!/usr/bin/env python3
# =============================================================================
#     File: errors.py
#  Created: 2026-10-16 10:02
#
"""
  Description: Exceptions raised by the contrast pipeline.
"""
# =============================================================================


class ContrastError(ValueError):
    """Base class for malformed inputs to the contrast pipeline."""
    pass


class InvalidInputError(ContrastError):
    """An empty or malformed posterior sample, grid, or series."""
    pass


class MismatchedGroupsError(ContrastError):
    """Two groups' predictions cannot be paired draw-by-draw."""
    pass


class InvalidQuantileError(ContrastError):
    """A quantile pair is out of [0, 1] or inverted."""
    pass

# =============================================================================
# =============================================================================
