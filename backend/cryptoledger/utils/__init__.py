"""
CryptoLedger - Utilities
"""
