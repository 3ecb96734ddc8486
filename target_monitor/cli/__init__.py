"""
Command-line interface module for the target price monitor.

This module provides the CLI for running a single immediate cycle or the
recurring scheduler with different configuration files and options.
"""

from .cli import main

__all__ = ["main"]
