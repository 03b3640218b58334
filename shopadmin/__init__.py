"""shopadmin - catalog tooling for an e-commerce admin dashboard.

This package provides:
- Category forest lookups, filtering and cascading selection
- Product variant generation and editing
- Attribute templates and product drafts
- An async client and session for the dashboard REST API
"""

__version__ = "0.1.0"
