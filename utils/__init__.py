"""
Shared utilities: logging setup, configuration keys and byte sizes.
"""
