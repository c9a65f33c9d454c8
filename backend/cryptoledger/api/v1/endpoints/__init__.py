"""
CryptoLedger - API v1 Endpoints
"""
