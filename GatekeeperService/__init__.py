"""
Gatekeeper license key service Django project.
"""
