"""
InterpKit CLI command implementations.
"""
