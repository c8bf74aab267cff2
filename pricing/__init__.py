"""
Pricing module - Price tiers charged to moderators per key.
"""
