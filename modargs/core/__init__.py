"""Core tokenizer, argument set, and error types.

WHY: The core is the stable heart of the package: every module that
takes arguments goes through the same tokenizer and accessors.

HOW: tokenizer.py scans the string, arguments.py builds and queries the
argument set, errors.py defines what can go wrong.

RULES:
- The tokenizer knows nothing about valid keys or types
- Sample-format rules live in modargs.sample, not here
"""
