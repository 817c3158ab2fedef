"""
Licenses module - License management.

This module handles:
- License entity and key generation
- License status overwrites, activation reset and expiry reconciliation
- Public license verification
- Audit log of license events
"""
