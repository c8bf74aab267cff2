"""
Keys module - License key lifecycle.

This module handles:
- Key entity and lifecycle (generate, activate, verify, delete)
- Key repository (port)
- Key infrastructure (Django ORM adapters)
"""
