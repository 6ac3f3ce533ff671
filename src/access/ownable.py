"""
Ownable — владелец и проверка owner-only операций

- Владелец задаётся при создании (deployer)
- transfer_ownership передаёт права новому адресу
- renounce_ownership оставляет конвертер без владельца: после этого
  любая owner-only операция отклоняется
"""

import logging
from typing import Optional

from src.core.errors import InvalidOwnerError, UnauthorizedError

logger = logging.getLogger(__name__)


class Ownable:
    """Хранит адрес владельца и проверяет вызывающего."""

    def __init__(self, owner: str):
        """
        Args:
            owner: адрес владельца (deployer)

        Raises:
            InvalidOwnerError: Если owner пустой
        """
        _require_owner(owner)
        self._owner: Optional[str] = owner

    @property
    def owner(self) -> Optional[str]:
        return self._owner

    def is_owner(self, caller: Optional[str]) -> bool:
        return self._owner is not None and caller == self._owner

    def check_owner(self, caller: Optional[str]) -> None:
        """
        Raises:
            UnauthorizedError: Если caller не владелец
        """
        if not self.is_owner(caller):
            logger.warning(f"Rejected owner-only call from {caller}")
            raise UnauthorizedError(caller)

    def transfer_ownership(self, caller: str, new_owner: str) -> Optional[str]:
        """
        Передача прав владельца.

        Returns:
            Адрес предыдущего владельца

        Raises:
            UnauthorizedError: Если caller не владелец
            InvalidOwnerError: Если new_owner пустой
        """
        self.check_owner(caller)
        _require_owner(new_owner)

        previous = self._owner
        self._owner = new_owner
        logger.info(f"Ownership transferred: {previous} → {new_owner}")
        return previous

    def renounce_ownership(self, caller: str) -> Optional[str]:
        """
        Отказ от владения (owner становится None).

        Returns:
            Адрес предыдущего владельца
        """
        self.check_owner(caller)

        previous = self._owner
        self._owner = None
        logger.info(f"Ownership renounced by {previous}")
        return previous


def _require_owner(owner: Optional[str]) -> None:
    if not isinstance(owner, str) or not owner.strip():
        raise InvalidOwnerError(owner)
