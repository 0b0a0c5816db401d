"""
Constants for the Product Lifecycle Tracker application.

This module defines system-wide constants including:
- Application metadata
- Field length limits for products and history notes
- Fixed ledger text
"""

# ============================================================================
# Application Metadata
# ============================================================================

APP_NAME = "Product Lifecycle Tracker"
APP_VERSION = "0.1.0"
DATABASE_FILENAME = "product_tracker.db"

# ============================================================================
# Field Limits
# ============================================================================

MAX_PRODUCT_NAME_LENGTH = 100
MAX_NOTES_LENGTH = 256
MAX_PARTY_LENGTH = 128

# ============================================================================
# Ledger
# ============================================================================

# Note recorded on history entry 1 of every product
CREATED_NOTE = "Product created"

# Name of the IdSequence row that hands out product IDs
PRODUCT_ID_SEQUENCE = "products"
