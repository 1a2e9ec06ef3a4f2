"""
Merkle Core - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for tree construction, proof generation
and proof verification. Defines both Pydantic models for structured error
communication and Python exceptions for control flow.

Structural problems (empty input, bad index, bad range, malformed proof)
raise. A proof that simply does not establish inclusion under a root is
reported by the verifiers as ``False`` and never raises.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the library."""

    # Fallback for the base exception
    MERKLE_ERROR = "MERKLE_ERROR"

    # Tree construction
    EMPTY_INPUT = "EMPTY_INPUT"
    INVALID_ELEMENT = "INVALID_ELEMENT"

    # Index & range arguments
    INDEX_OUT_OF_BOUNDS = "INDEX_OUT_OF_BOUNDS"
    INVALID_RANGE = "INVALID_RANGE"

    # Proof structure
    MALFORMED_PROOF = "MALFORMED_PROOF"

    # Hashing & configuration
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for returning errors as values.

    Callers that prefer not to use exceptions for control flow can convert
    any raised MerkleException with ``to_error_model()`` and pass the
    result along.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INDEX_OUT_OF_BOUNDS],
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

    def to_exception(self) -> "MerkleException":
        """Convert this error model to the matching exception type."""
        exc_type = _EXCEPTIONS_BY_CODE.get(self.code)
        if exc_type is None:
            return MerkleException(
                message=self.message,
                code=self.code,
                details=dict(self.details),
                retryable=self.retryable,
            )
        return exc_type(message=self.message, details=dict(self.details))


class BoundsError(MerkleError):
    """Error model for index and range arguments outside the tree."""

    code: str = Field(default=ErrorCodes.INDEX_OUT_OF_BOUNDS)
    index: int | None = Field(
        default=None,
        description="Index argument that was rejected",
    )
    start: int | None = Field(default=None)
    end: int | None = Field(default=None)
    size: int | None = Field(
        default=None,
        description="Number of positions the argument was checked against",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all merkle_core errors.

    Carries structured error information and can be converted to a
    MerkleError model.
    """

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.MERKLE_ERROR,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(MerkleException, ValueError):
    """Exception raised when a tree is requested over zero elements."""

    def __init__(
        self,
        message: str = "cannot build a tree with zero elements",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class InvalidElementException(MerkleException, TypeError):
    """Exception raised when an element is neither str nor bytes."""

    def __init__(
        self,
        message: str,
        element_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if element_type:
            full_details["type"] = element_type
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ELEMENT,
            details=full_details,
            retryable=False,
        )


class IndexOutOfBoundsException(MerkleException, IndexError):
    """Exception raised when an element index falls outside the tree."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        if size is not None:
            full_details["size"] = size
        super().__init__(
            message=message,
            code=ErrorCodes.INDEX_OUT_OF_BOUNDS,
            details=full_details,
            retryable=False,
        )

    def to_error_model(self) -> BoundsError:
        return BoundsError(
            message=self.message,
            details=self.details,
            index=self.details.get("index"),
            size=self.details.get("size"),
        )


class InvalidRangeException(MerkleException, ValueError):
    """Exception raised when a [start, end) range is empty, inverted or too long."""

    def __init__(
        self,
        message: str,
        start: int | None = None,
        end: int | None = None,
        size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if start is not None:
            full_details["start"] = start
        if end is not None:
            full_details["end"] = end
        if size is not None:
            full_details["size"] = size
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_RANGE,
            details=full_details,
            retryable=False,
        )

    def to_error_model(self) -> BoundsError:
        return BoundsError(
            code=ErrorCodes.INVALID_RANGE,
            message=self.message,
            details=self.details,
            start=self.details.get("start"),
            end=self.details.get("end"),
            size=self.details.get("size"),
        )


class MalformedProofException(MerkleException, ValueError):
    """Exception raised when a proof value is structurally inconsistent."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=details,
            retryable=False,
        )


class UnsupportedAlgorithmException(MerkleException, ValueError):
    """Exception raised when a digest algorithm cannot be used for hashing."""

    def __init__(
        self,
        message: str,
        algorithm: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if algorithm:
            full_details["algorithm"] = algorithm
        super().__init__(
            message=message,
            code=ErrorCodes.UNSUPPORTED_ALGORITHM,
            details=full_details,
            retryable=False,
        )


class ConfigException(MerkleException):
    """Exception raised when runtime configuration cannot be loaded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=details,
            retryable=False,
        )


_EXCEPTIONS_BY_CODE: dict[str, type[MerkleException]] = {
    ErrorCodes.EMPTY_INPUT: EmptyInputException,
    ErrorCodes.INVALID_ELEMENT: InvalidElementException,
    ErrorCodes.INDEX_OUT_OF_BOUNDS: IndexOutOfBoundsException,
    ErrorCodes.INVALID_RANGE: InvalidRangeException,
    ErrorCodes.MALFORMED_PROOF: MalformedProofException,
    ErrorCodes.UNSUPPORTED_ALGORITHM: UnsupportedAlgorithmException,
    ErrorCodes.CONFIG_ERROR: ConfigException,
}
