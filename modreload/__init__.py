"""
modreload - reload ordering for interdependent modules.

Given each module's direct dependencies and a set of changed modules,
computes which modules are affected and the order to reload them in.
"""

__version__ = "1.0.0"
