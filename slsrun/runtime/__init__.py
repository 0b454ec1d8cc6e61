"""
Runtime module for slsrun.

This module contains the business logic for each CLI subcommand,
exposed as both CLI commands and Python SDK functions.
"""

from .deploy_runtime import ServerlessRuntime

__all__ = ["ServerlessRuntime"]
