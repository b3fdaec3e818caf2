"""Unit tests for the exception taxonomy."""

import pytest

from finshare.core.exceptions import (
    FinshareException,
    InvalidInputError,
    NotFoundException,
    PermissionException,
)
from finshare.domains.sharing.exceptions import (
    InvalidGrantScopeError,
    RecordNotVisibleError,
    RecurringRuleNotVisibleError,
    SelfShareError,
    WriteForbiddenError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc, base",
        [
            (RecordNotVisibleError(), NotFoundException),
            (RecurringRuleNotVisibleError(), NotFoundException),
            (WriteForbiddenError(WriteForbiddenError.READ_ONLY), PermissionException),
            (InvalidGrantScopeError("bad"), InvalidInputError),
            (SelfShareError(), InvalidInputError),
        ],
    )
    def test_domain_errors_map_to_core_bases(self, exc, base):
        assert isinstance(exc, base)
        assert isinstance(exc, FinshareException)
        assert exc.message

    def test_default_messages(self):
        assert NotFoundException().message == "Object not found"
        assert str(PermissionException()) == PermissionException().message
