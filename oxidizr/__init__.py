"""Swap essential system utilities for Rust-based replacements on Fedora."""

__version__ = "1.1.0"