"""
CryptoLedger - API v1
"""
