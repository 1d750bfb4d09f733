"""
Contains the ``ReminderStore`` class, which describes everything RemindBridge needs from a reminders store, and the
``StoreList`` and ``StoreReminder`` records the store hands out.
"""

from __future__ import annotations

from typing import Any, Callable, List

import remindbridge.reminders.model.reminder as model


class StoreError(Exception):
    """
    Raised by a store when it rejects a save or removal. The message is the store's human-readable description.
    """


class StoreList:
    """
    A reminder list (calendar) as held by the store.
    """

    def __init__(self, title: str, identifier: str | None = None, source: Any = None, native: Any = None):
        """
        Create a new store list record.

        :param title: the display name of the list.
        :param identifier: the store-assigned ID, or None for a list which has not been saved yet.
        :param source: the account/source the list belongs to.
        :param native: the backing object of the store, if any.
        """
        self.title: str = title
        self.identifier: str | None = identifier
        self.source: Any = source
        self.native: Any = native

    def __str__(self):
        return self.title

    def __repr__(self):
        return self.title


class StoreReminder:
    """
    A reminder as held by the store. Unlike :py:class:`~remindbridge.reminders.model.reminder.Reminder`, this is mutable
    and is what gets saved back.
    """

    def __init__(self,
                 store_list: StoreList | None = None,
                 identifier: str | None = None,
                 title: str | None = None,
                 due_date: model.DueDate | None = None,
                 priority: int = 0,
                 completed: bool = False,
                 notes: str | None = None,
                 native: Any = None):
        self.store_list: StoreList | None = store_list
        self.identifier: str | None = identifier
        self.title: str | None = title
        self.due_date: model.DueDate | None = due_date
        self.priority: int = priority
        self.completed: bool = completed
        self.notes: str | None = notes
        self.native: Any = native

    def __str__(self):
        return self.title or ''

    def __repr__(self):
        return self.title or ''


class ReminderStore:
    """
    The capabilities a reminders store must offer. Fetches and permission requests are asynchronous and call their
    completion exactly once, on whatever thread the store chooses. Saves and removals are synchronous and raise
    :py:class:`StoreError` on failure.
    """

    def reminder_lists(self) -> List[StoreList]:
        """
        :return: every list which can hold reminders, in store order.
        """
        raise NotImplementedError

    def list_with_id(self, identifier: str) -> StoreList | None:
        """
        :param identifier: the ID of the list to find.
        :return: the list with the given ID, or None.
        """
        raise NotImplementedError

    def item_with_id(self, identifier: str) -> Any:
        """
        Look up any store item by ID. Callers must check the type of what is returned, since the ID may belong to
        something other than a reminder.

        :param identifier: the ID of the item to find.
        :return: the item, or None.
        """
        raise NotImplementedError

    def predicate_for_reminders(self, lists: List[StoreList] | None) -> Any:
        """
        Build a predicate matching every reminder in ``lists``, or in every list if ``lists`` is None.

        :param lists: the lists to search.
        :return: an opaque predicate, or None if one cannot be built.
        """
        raise NotImplementedError

    def fetch_reminders(self, predicate: Any, completion: Callable[[List[StoreReminder]], None]) -> None:
        """
        Fetch all reminders matching ``predicate``. ``completion`` receives the full result set once.
        """
        raise NotImplementedError

    def new_reminder(self) -> StoreReminder:
        """
        :return: a new, unsaved reminder.
        """
        raise NotImplementedError

    def save_reminder(self, reminder: StoreReminder, commit: bool = True) -> None:
        raise NotImplementedError

    def new_list(self, title: str, source: Any) -> StoreList:
        """
        :param title: the title of the new list.
        :param source: the source the list should be created in.
        :return: a new, unsaved list.
        """
        raise NotImplementedError

    def save_list(self, store_list: StoreList, commit: bool = True) -> None:
        raise NotImplementedError

    def remove_reminder(self, reminder: StoreReminder, commit: bool = True) -> None:
        raise NotImplementedError

    def supports_full_access(self) -> bool:
        """
        :return: True if the platform uses the full-access authorization model for reminders.
        """
        raise NotImplementedError

    def request_full_access(self, completion: Callable[[bool, Any], None]) -> None:
        """
        Request full read/write access to reminders. ``completion`` receives ``(granted, error)``.
        """
        raise NotImplementedError

    def request_access(self, completion: Callable[[bool, Any], None]) -> None:
        """
        Request access to reminders using the legacy authorization model. ``completion`` receives ``(granted, error)``.
        """
        raise NotImplementedError

    def default_list(self) -> StoreList | None:
        """
        :return: the list new reminders go into, or None if the store has none (e.g. access has not been granted).
        """
        raise NotImplementedError
