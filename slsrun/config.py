"""
Configuration module for slsrun
"""
import os
from typing import Dict
from dotenv import load_dotenv


# Load environment variables from .env file
load_dotenv()


def get_provider() -> str:
    """
    Get the expected provider name from environment or return default

    Returns:
        Provider name
    """
    return os.getenv("SLSRUN_PROVIDER", "aws")


def get_directory() -> str:
    """
    Get the service descriptor directory from environment or return default

    Returns:
        Directory path
    """
    return os.getenv("SLSRUN_DIRECTORY", ".")


def get_log_level() -> str:
    return os.getenv("SLSRUN_LOG_LEVEL", "INFO").upper()


def get_extra_options() -> Dict[str, str]:
    """
    Get extra serverless options from SLSRUN_OPTIONS

    The variable holds comma-separated name=value pairs, e.g.
    ``region=eu-west-1,aws-profile=ci``.

    Returns:
        Dictionary of option name to value
    """
    return parse_options(os.getenv("SLSRUN_OPTIONS", "").split(","))


def parse_options(pairs) -> Dict[str, str]:
    """Parse name=value strings into a dict, skipping blanks."""
    options = {}
    for pair in pairs:
        pair = pair.strip()
        if not pair:
            continue
        if "=" not in pair:
            raise ValueError(f"Invalid option '{pair}', expected name=value")
        name, value = pair.split("=", 1)
        options[name.strip().lstrip("-")] = value.strip()
    return options
