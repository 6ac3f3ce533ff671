"""
Core domain models, exact math primitives, errors and contract validation.

This module contains the foundational building blocks that are independent
of the token ledger and of the converter itself.
"""
