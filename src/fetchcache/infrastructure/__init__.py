"""
Infrastructure Layer
Backing storage adapters and observability
"""
