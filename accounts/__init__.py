"""
Accounts module - Moderator accounts, debt ledger and access rules.

This module handles:
- Moderator entity and domain logic
- Login and authorization (AccessPolicy)
- Moderator and ledger repositories (ports and Django adapters)
"""
