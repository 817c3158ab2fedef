"""
Customers module - Customer and Subscription records.

This module handles:
- Customer entity (the purchaser a license is bound to)
- Subscription entity and billing status
- Lookups used by webhook processors (billing customer id, email)
"""
