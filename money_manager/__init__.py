"""
Money Manager - Source Package

A personal finance tracker that records transactions against accounts,
categorizes them and derives every summary view from the transaction log.

DESIGN PRINCIPLES:
1. The transaction log is append-only
2. Current balances plus the log are the only ground truth
3. History is reconstructed, never stored
4. Every mutation is persisted and audited
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Money Manager Team"
