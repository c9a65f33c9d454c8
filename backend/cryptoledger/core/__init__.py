"""
CryptoLedger - Core Domain Services
"""
