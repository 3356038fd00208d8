"""
Ballotbox - Single-election proposal voting

An administrator registers voters, opens a proposal window, opens a
voting window and tallies the result. Every accepted call emits an
ordered notification for external observers.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
