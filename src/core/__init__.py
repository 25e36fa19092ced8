"""
Core domain models, price math, errors and contracts.

This module contains the foundational building blocks shared by the ledger,
the auction engines, minting and the coordinator.
"""
