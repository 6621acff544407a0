"""
Service layer for the third-party APIs behind the gateway
"""
