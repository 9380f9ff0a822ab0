"""Unit tests for the domain error to HTTP mapping."""

import json

from desk.domain.error import (
    BusinessRuleViolationError,
    DomainError,
    InvalidReferenceError,
    MaterialLockedError,
    NotAuthenticatedError,
    NotAuthorizedError,
    NotFoundError,
    PresenceUnavailableError,
    SubmissionFailedError,
    ValidationError,
)
from desk.interface.api.errors import error_response


def _body(response) -> dict:
    return json.loads(response.body)


class TestErrorResponse:
    """Tests for error_response."""

    def test_status_codes(self):
        """Each error kind maps to its status code."""
        # Arrange
        cases = [
            (NotAuthenticatedError(), 401, "not_authenticated"),
            (NotAuthorizedError("manage tags", "u1"), 403, "not_authorized"),
            (NotFoundError("Material", "m1"), 404, "not_found"),
            (ValidationError("Name is required"), 422, "validation_failed"),
            (InvalidReferenceError("tag", "t1"), 422, "validation_failed"),
            (BusinessRuleViolationError("Name taken"), 409, "conflict"),
            (SubmissionFailedError("m1", "tags", ["comment"]), 500, "submission_failed"),
        ]

        for error, status_code, code in cases:
            # Act
            response = error_response(error)

            # Assert
            assert response.status_code == status_code
            assert _body(response)["error"] == code

    def test_locked_response_names_holder(self):
        """Locked responses carry the holder's identity."""
        # Arrange
        error = MaterialLockedError("m1", "ben@example.org")

        # Act
        response = error_response(error)

        # Assert
        assert response.status_code == 409
        assert _body(response)["error"] == "locked"
        assert _body(response)["holder"] == "ben@example.org"

    def test_unmapped_error_is_internal(self):
        """Errors without a mapping are answered with 500."""
        # Arrange
        errors = [DomainError("boom"), PresenceUnavailableError("down")]

        for error in errors:
            # Act
            response = error_response(error)

            # Assert
            assert response.status_code == 500
            assert _body(response)["error"] == "internal_error"
