"""Command-line front end for gofmt-import: handlers plus parser/dispatch wiring.

Importing the package does nothing; handlers load the library lazily.
"""

__all__ = []
