"""
Domain errors raised by the store, the access policy engine and the
identity service. The HTTP layer turns them into responses in main.py.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ProfessorAidError(Exception):
    """Base class for every application error."""

    error_code = "PROFESSOR_AID_ERROR"

    def __init__(self, message: str, error_code: str = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

        logger.warning("%s: %s", self.__class__.__name__, message, extra={"error_code": self.error_code})

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "error_code": self.error_code, "details": self.details}


class ConstraintViolation(ProfessorAidError):
    """Enum, uniqueness or foreign-key constraint rejected a write."""

    error_code = "CONSTRAINT_VIOLATION"

    def __init__(self, constraint: str, message: str = None, details: Optional[Dict[str, Any]] = None):
        self.constraint = constraint
        details = dict(details or {})
        details["constraint"] = constraint
        super().__init__(message or f"Constraint violated: {constraint}", details=details)


class AuthorizationFiltered(ProfessorAidError):
    """Write targets a row outside the caller's ownership chain."""

    error_code = "AUTHORIZATION_FILTERED"

    def __init__(self, table: str, operation: str):
        super().__init__(
            f"New row violates row-level security policy for table \"{table}\"",
            details={"table": table, "operation": operation},
        )


class DependencyMissing(ProfessorAidError):
    """Parent row does not exist or is not visible to the caller."""

    error_code = "DEPENDENCY_MISSING"

    def __init__(self, table: str, parent_table: str, parent_id: Any):
        super().__init__(
            f"Referenced {parent_table} row not found: {parent_id}",
            details={"table": table, "parent_table": parent_table, "parent_id": parent_id},
        )


class ValidationFailed(ProfessorAidError):
    error_code = "VALIDATION_FAILED"


class InvalidCredentials(ProfessorAidError):
    error_code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid login credentials"):
        super().__init__(message)


class IdentityAlreadyExists(ProfessorAidError):
    error_code = "IDENTITY_EXISTS"

    def __init__(self, email: str):
        super().__init__("User already registered", details={"email": email})
