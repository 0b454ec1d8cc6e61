"""
Services module for slsrun.

This module provides low-level utilities and interfaces with external systems
such as the serverless framework, language build toolchains and the service
descriptor.
"""
