"""
Stamina SDK Command-Line Interface
==================================

This package provides command-line tools for the Stamina SDK:

- **smtok**: Token dump for smasm assembly source

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["smtok"]
