"""
Configuration: environment settings, configuration files and file validator settings.
"""
