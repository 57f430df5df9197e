# services/__init__.py
"""Services package for transport-cost-app: storage, presets and utilities."""
