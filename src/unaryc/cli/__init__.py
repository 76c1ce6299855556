"""
unaryc Command-Line Interface
=============================

- **ucc**: compile unary-language source to stack-machine assembly

The tool is a Click application with built-in help and consistent exit
codes (see unaryc.cli.errors).
"""

__all__ = ["ucc"]
