"""
Module 01 - Schemas
File: errors.py

Purpose: Standard error taxonomy for the account tree core.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every tree and codec failure is raised as a distinguishable exception so
that a single malformed input can be rejected by the caller without
halting the surrounding pipeline.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the tree core."""

    # Tree Errors
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    INVALID_DEPTH = "INVALID_DEPTH"

    # Codec Errors
    ENCODING_OVERFLOW = "ENCODING_OVERFLOW"
    DECODING_ERROR = "DECODING_ERROR"

    # Hasher Errors
    HASHER_CONTRACT_VIOLATION = "HASHER_CONTRACT_VIOLATION"

    # Merkle & Commitment Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Configuration Errors
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class PlasmaError(BaseModel):
    """
    Base error model for structured error communication.

    This model is used for passing errors between components without
    exceptions, e.g. when a ledger rejects a batch and reports why.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INDEX_OUT_OF_RANGE],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "PlasmaException":
        """Convert this error model to a raised exception."""
        return PlasmaException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class PlasmaException(Exception):
    """
    Base exception for all account tree errors.

    This exception carries structured error information and can be
    converted to/from PlasmaError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "PLASMA_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> PlasmaError:
        """Convert this exception to a PlasmaError model."""
        return PlasmaError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class IndexOutOfRangeException(PlasmaException, IndexError):
    """Raised when a leaf index falls outside [0, 2^depth)."""

    def __init__(
        self,
        index: int,
        depth: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["index"] = index
        full_details["depth"] = depth
        super().__init__(
            message=f"Leaf index {index} out of range for tree of depth {depth} "
                    f"(capacity {1 << depth})",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )
        self.index = index
        self.depth = depth


class InvalidDepthException(PlasmaException, ValueError):
    """Raised when a tree is constructed with a negative depth."""

    def __init__(self, depth: int) -> None:
        super().__init__(
            message=f"Tree depth must be non-negative, got {depth}",
            code=ErrorCodes.INVALID_DEPTH,
            details={"depth": depth},
            retryable=False,
        )
        self.depth = depth


class EncodingOverflowException(PlasmaException, ValueError):
    """
    Raised when a value needs more bits than its declared width.

    Detected at encode time, before anything is hashed, so a truncated
    value can never be committed to.
    """

    def __init__(
        self,
        field_name: str,
        width: int,
        bit_length: int,
    ) -> None:
        super().__init__(
            message=f"Field '{field_name}' needs {bit_length} bits "
                    f"but its declared width is {width}",
            code=ErrorCodes.ENCODING_OVERFLOW,
            details={
                "field": field_name,
                "width": width,
                "bit_length": bit_length,
            },
            retryable=False,
        )
        self.field_name = field_name
        self.width = width
        self.bit_length = bit_length


class DecodingException(PlasmaException, ValueError):
    """Raised when a bit sequence cannot be decoded into a value."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.DECODING_ERROR,
            details=details,
            retryable=False,
        )


class HasherContractException(PlasmaException):
    """
    Raised when a hasher disagrees with the leaf codec's layout or
    its own domain-separation guarantees.

    This is a configuration-consistency failure, checked once via
    check_hasher_contract() rather than on every call.
    """

    def __init__(
        self,
        message: str,
        check: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if check:
            full_details["check"] = check
        super().__init__(
            message=message,
            code=ErrorCodes.HASHER_CONTRACT_VIOLATION,
            details=full_details,
            retryable=False,
        )


class MerkleVerificationException(PlasmaException):
    """Raised when an authentication path does not reproduce the root."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
            retryable=False,
        )


class ConfigurationException(PlasmaException, ValueError):
    """Raised when circuit or hasher configuration is inconsistent."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if setting:
            full_details["setting"] = setting
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_CONFIGURATION,
            details=full_details,
            retryable=False,
        )
