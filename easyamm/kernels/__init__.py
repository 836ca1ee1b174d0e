"""
Kernel layer.

`easyamm/kernels/python/` holds the integer-only pricing kernels. They take
plain ints (keyword-only), validate every input, and return frozen result
dataclasses. The calculators in `easyamm.core` wrap them with the pool's
`ReserveSnapshot`.
"""
