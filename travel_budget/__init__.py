"""
Travel Budget - Source Package

A shared travel budget for a group chat: a per-city, per-day allowance
plus a free-spending pool, tracked against plain text commands.

DESIGN PRINCIPLES:
1. The log of expenses is the only source of truth for spend
2. The balance is recomputed from scratch, never carried forward
3. Unknown input is met with silence, not errors
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Travel Budget Team"
