"""
wedX Ritual Engine Application Package.

Planning rules for Sri Lankan weddings featuring:
- Ritual template catalog (Poruwa, Home Coming, Reception, Engagement, Nalangu)
- Dated, prioritized ritual preparation tasks
- Preparation timeline and ritual configuration validation
- Event timing and vendor double-booking conflict detection
"""

__version__ = "1.0.0"
__author__ = "wedX Team"
