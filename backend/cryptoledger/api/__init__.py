"""
CryptoLedger - API
"""
