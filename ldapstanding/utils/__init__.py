"""Utility modules for LDAPStanding.

Modules:
    console: Rich console output
    date_parser: Generalized time and Win32 FILETIME utilities
    logging: Verbosity-gated logging wrappers
"""
