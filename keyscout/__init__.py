# keyscout/__init__.py
"""
KeyScout package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

