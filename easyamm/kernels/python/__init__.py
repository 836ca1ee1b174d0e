"""
Integer pricing kernels.

Each kernel is a pure function over u64 amounts. Intermediates are widened
and checked the way the ledger widens them (u128 products, u256 inside the
square root), and every division names its rounding direction.
"""
