"""Unit tests for the error code catalogue."""

import pytest

from vfire.domain.exceptions import (
    AccountRejectedError,
    ApplicationNotFoundError,
    BusinessRuleViolationError,
    DomainError,
    DuplicateChecklistError,
    DuplicateEmailError,
    EstablishmentNotRegisteredError,
    InvalidStatusTransitionError,
    UnauthorizedError,
    ValidationError,
)
from vfire.error_codes import ErrorCode


class TestErrorCodeEntries:

    def test_every_entry_has_both_messages(self):
        entries = [getattr(ErrorCode, name) for name in dir(ErrorCode) if name.startswith('ERR_')]
        assert entries
        for entry in entries:
            assert set(entry) == {'code', 'admin_msg', 'user_msg'}
            assert entry['user_msg']


class TestErrorCodeGetError:

    def test_by_code_string(self):
        """Should look up an entry by its code."""
        assert ErrorCode.get_error('ERR_4001') is ErrorCode.ERR_4001

    def test_unknown_code_string(self):
        assert ErrorCode.get_error('ERR_0000') is ErrorCode.ERR_9001

    @pytest.mark.parametrize('error,expected', [
        (EstablishmentNotRegisteredError('e1', 'pending'), 'ERR_4002'),
        (DuplicateChecklistError('a1'), 'ERR_4003'),
        (DuplicateEmailError('a@example.com'), 'ERR_3004'),
        (InvalidStatusTransitionError('approved', 'rejected'), 'ERR_4001'),
        (BusinessRuleViolationError('X', 'nope'), 'ERR_4004'),
        (ValidationError('bad', 'email'), 'ERR_1001'),
        (ApplicationNotFoundError('a1'), 'ERR_3002'),
        (UnauthorizedError(), 'ERR_2002'),
        (AccountRejectedError('p1'), 'ERR_2003'),
        (DomainError('generic'), 'ERR_4004'),
    ])
    def test_domain_errors(self, error, expected):
        """Should map each domain error to its catalogue entry."""
        assert ErrorCode.get_error(error)['code'] == expected

    def test_unique_constraint_message(self):
        error = Exception('UNIQUE constraint failed: profiles.email')
        assert ErrorCode.get_error(error) is ErrorCode.ERR_3004

    def test_connection_message(self):
        assert ErrorCode.get_error(Exception('connection refused')) is ErrorCode.ERR_3003

    def test_rate_limit_message(self):
        assert ErrorCode.get_error('Too many requests') is ErrorCode.ERR_9002

    def test_unknown_exception(self):
        assert ErrorCode.get_error(RuntimeError('boom')) is ErrorCode.ERR_9001
