"""
stockreplay CLI - Point-in-time stock reconstruction

Commands:
- stockreplay replay - Replay a movement journal onto a stock snapshot
- stockreplay journal inspect - List and filter journal entries
- stockreplay stock show - List and filter a stock snapshot
"""

__version__ = "0.1.0"
