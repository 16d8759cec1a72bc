"""
Stock Replay

Reconstructs a point-in-time inventory snapshot by replaying a stock-movement
journal against a baseline stock snapshot.
"""

__version__ = "0.1.0"
