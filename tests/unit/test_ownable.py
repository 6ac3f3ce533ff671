"""Unit тесты для Ownable."""

import pytest

from src.access import Ownable
from src.core.errors import InvalidOwnerError, UnauthorizedError


OWNER = "0xowner"
STRANGER = "0xstranger"
NEW_OWNER = "0xnewowner"


class TestOwnable:
    """Проверка владельца, передача и отказ от владения."""

    def test_owner_set_at_construction(self):
        ownable = Ownable(OWNER)
        assert ownable.owner == OWNER
        assert ownable.is_owner(OWNER)
        assert not ownable.is_owner(STRANGER)

    @pytest.mark.parametrize("bad_owner", ["", "   ", None])
    def test_empty_owner_rejected(self, bad_owner):
        with pytest.raises(InvalidOwnerError):
            Ownable(bad_owner)

    def test_check_owner_rejects_stranger(self):
        ownable = Ownable(OWNER)
        with pytest.raises(UnauthorizedError) as exc_info:
            ownable.check_owner(STRANGER)
        assert exc_info.value.account == STRANGER

    def test_transfer_ownership(self):
        ownable = Ownable(OWNER)
        previous = ownable.transfer_ownership(OWNER, NEW_OWNER)

        assert previous == OWNER
        assert ownable.owner == NEW_OWNER
        with pytest.raises(UnauthorizedError):
            ownable.check_owner(OWNER)

    def test_transfer_ownership_by_stranger(self):
        ownable = Ownable(OWNER)
        with pytest.raises(UnauthorizedError):
            ownable.transfer_ownership(STRANGER, STRANGER)
        assert ownable.owner == OWNER

    def test_transfer_to_empty_owner(self):
        ownable = Ownable(OWNER)
        with pytest.raises(InvalidOwnerError):
            ownable.transfer_ownership(OWNER, "")
        assert ownable.owner == OWNER

    def test_renounce_ownership(self):
        ownable = Ownable(OWNER)
        ownable.renounce_ownership(OWNER)

        assert ownable.owner is None
        assert not ownable.is_owner(None)
        with pytest.raises(UnauthorizedError):
            ownable.check_owner(OWNER)
