"""
Activations module - domain activations of a license.

This module handles:
- Activation entity and domain logic
- Activation limits per license
- Domain activation/deactivation
"""
