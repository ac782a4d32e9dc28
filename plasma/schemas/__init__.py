"""
Module 01 - Schemas
File: __init__.py

Purpose: Export the error taxonomy shared by every other module.
"""

from .errors import (
    ConfigurationException,
    DecodingException,
    EncodingOverflowException,
    ErrorCodes,
    HasherContractException,
    IndexOutOfRangeException,
    InvalidDepthException,
    MerkleVerificationException,
    PlasmaError,
    PlasmaException,
)

__all__ = [
    "ErrorCodes",
    "PlasmaError",
    "PlasmaException",
    "IndexOutOfRangeException",
    "InvalidDepthException",
    "EncodingOverflowException",
    "DecodingException",
    "HasherContractException",
    "MerkleVerificationException",
    "ConfigurationException",
]
