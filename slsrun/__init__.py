"""
slsrun - Deployment orchestration for multi-runtime serverless services.
"""

__version__ = "0.1.0"

from .runtime.deploy_runtime import ServerlessRuntime

__all__ = [
    "ServerlessRuntime",
]
