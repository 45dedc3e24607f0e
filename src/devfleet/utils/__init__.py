"""
Helpers shared by the devfleet services.
"""

from devfleet.utils.ids import is_id
from devfleet.utils.options import PineOptions, merge_pine_options

__all__ = ["is_id", "merge_pine_options", "PineOptions"]
