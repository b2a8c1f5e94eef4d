"""Abstract repository for sales transactions and their lines."""

from __future__ import annotations

from abc import ABC, abstractmethod

from kasir.domain.model.transaction import Transaction, TransactionItem


class TransactionRepository(ABC):

    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """Return every transaction regardless of status or outlet."""

    @abstractmethod
    def list_items(self) -> list[TransactionItem]:
        """Return every transaction line."""
