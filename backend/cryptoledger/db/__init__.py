"""
CryptoLedger - Database Layer
"""
