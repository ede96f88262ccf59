"""
Exception classes for Salt Edge Partner SDK
"""

from typing import Optional, Dict, Any


class SaltedgePartnerError(Exception):
    """Base exception for all Salt Edge Partner SDK errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ConfigurationError(SaltedgePartnerError):
    """Exception raised when the client or signer is misconfigured"""
    pass


class ValidationError(SaltedgePartnerError):
    """Exception raised for invalid local input"""
    pass


class SigningError(SaltedgePartnerError):
    """
    Exception raised when a request signature cannot be produced
    
    Attributes:
        message: Error message
        error_code: One of ``SigningErrorCodes``
        details: Optional additional error details
    """
    
    def __init__(self, message: str, error_code: str = "SIGNING_FAILED", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.error_code}, details: {self.details})"
        return f"{self.message} (code: {self.error_code})"
    
    def __repr__(self) -> str:
        return f"SigningError(message='{self.message}', code='{self.error_code}', details={self.details})"


class SigningErrorCodes:
    """Standard error codes for signing operations"""
    
    SIGNER_REQUIRED = "SIGNER_REQUIRED"
    INVALID_PRIVATE_KEY = "INVALID_PRIVATE_KEY"
    UNSUPPORTED_KEY_TYPE = "UNSUPPORTED_KEY_TYPE"
    SIGNING_FAILED = "SIGNING_FAILED"
    REMOTE_SIGNING_FAILED = "REMOTE_SIGNING_FAILED"
    INVALID_SIGNATURE_RESULT = "INVALID_SIGNATURE_RESULT"
