"""
Submission services.

This module provides the write and read paths shared by every view.
"""

from .pseudonym import generate_pseudonym
from .sync_coordinator import SyncCoordinator, filter_and_sort

__all__ = ["SyncCoordinator", "filter_and_sort", "generate_pseudonym"]
