"""
adapters - Entry points that drive the application services.
"""
