"""
InterpKit - local registry of Python interpreter toolchains.

InterpKit keeps interpreter installations under a canonical, version-keyed
directory layout that build and environment tooling consume by name.
"""

__version__ = "0.1.0"
