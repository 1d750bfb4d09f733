"""
Contains the ``MemoryStore`` class, a reminders store which lives entirely in memory. It is used for dry runs, for
developing host applications away from a Mac, and in tests.
"""

from __future__ import annotations

import copy
import threading
from typing import Any, Callable, Dict, List

from remindbridge import helpers
from remindbridge.reminders.model.store import ReminderStore, StoreError, StoreList, StoreReminder


class MemoryStore(ReminderStore):
    """
    A dictionary-backed reminders store. IDs are UUIDs. Saved reminders are copied in and out of the store, so changes
    made to a fetched reminder are only visible to others once it is saved.
    """

    #: Name of the single source lists are created in.
    SOURCE = 'Local'

    def __init__(self,
                 default_list_title: str | None = helpers.DEFAULT_LIST_TITLE,
                 list_titles: List[str] | None = None,
                 grant_access: bool = True,
                 full_access: bool = True):
        """
        Create a new in-memory store.

        :param default_list_title: the title of the default list, or None to start without a default list.
        :param list_titles: titles of additional lists to create.
        :param grant_access: the answer given to permission requests.
        :param full_access: True to emulate the full-access authorization model, False for the legacy one.
        """
        self.grant_access: bool = grant_access
        self.full_access: bool = full_access
        #: Kind of each permission request received, ``full`` or ``legacy``.
        self.access_requests: List[str] = []
        #: Set once a permission request is denied. The default list is hidden from then on, as EventKit does.
        self.denied: bool = False
        #: When set, every save and removal raises a StoreError with this message.
        self.fail_saves: str | None = None
        self._lists: Dict[str, StoreList] = {}
        self._reminders: Dict[str, StoreReminder] = {}
        self._default_list_id: str | None = None
        self._lock = threading.RLock()

        if default_list_title is not None:
            default_list = self.new_list(default_list_title, MemoryStore.SOURCE)
            self.save_list(default_list)
            self._default_list_id = default_list.identifier
        for title in list_titles or []:
            self.save_list(self.new_list(title, MemoryStore.SOURCE))

    def reminder_lists(self) -> List[StoreList]:
        with self._lock:
            return list(self._lists.values())

    def list_with_id(self, identifier: str) -> StoreList | None:
        with self._lock:
            return self._lists.get(identifier)

    def item_with_id(self, identifier: str) -> Any:
        with self._lock:
            if identifier in self._reminders:
                return copy.copy(self._reminders[identifier])
            return self._lists.get(identifier)

    def predicate_for_reminders(self, lists: List[StoreList] | None) -> Any:
        if lists is None:
            return lambda r: True
        ids = {lst.identifier for lst in lists}
        return lambda r: r.store_list is not None and r.store_list.identifier in ids

    def fetch_reminders(self, predicate: Any, completion: Callable[[List[StoreReminder]], None]) -> None:
        with self._lock:
            matches = [copy.copy(r) for r in self._reminders.values() if predicate(r)]
        threading.Thread(target=completion, args=(matches,), daemon=True).start()

    def new_reminder(self) -> StoreReminder:
        return StoreReminder()

    def save_reminder(self, reminder: StoreReminder, commit: bool = True) -> None:
        if self.fail_saves is not None:
            raise StoreError(self.fail_saves)
        with self._lock:
            if reminder.store_list is None or reminder.store_list.identifier not in self._lists:
                raise StoreError('No calendar has been set.')
            if reminder.identifier is None:
                reminder.identifier = helpers.get_uuid()
            self._reminders[reminder.identifier] = copy.copy(reminder)

    def new_list(self, title: str, source: Any) -> StoreList:
        return StoreList(title, source=source)

    def save_list(self, store_list: StoreList, commit: bool = True) -> None:
        if self.fail_saves is not None:
            raise StoreError(self.fail_saves)
        if store_list.source is None:
            raise StoreError('The calendar has no source.')
        with self._lock:
            if store_list.identifier is None:
                store_list.identifier = helpers.get_uuid()
            self._lists[store_list.identifier] = store_list

    def remove_reminder(self, reminder: StoreReminder, commit: bool = True) -> None:
        if self.fail_saves is not None:
            raise StoreError(self.fail_saves)
        with self._lock:
            if self._reminders.pop(reminder.identifier, None) is None:
                raise StoreError('The reminder has already been removed.')

    def supports_full_access(self) -> bool:
        return self.full_access

    def request_full_access(self, completion: Callable[[bool, Any], None]) -> None:
        self._answer('full', completion)

    def request_access(self, completion: Callable[[bool, Any], None]) -> None:
        self._answer('legacy', completion)

    def _answer(self, kind: str, completion: Callable[[bool, Any], None]) -> None:
        self.access_requests.append(kind)
        self.denied = not self.grant_access
        threading.Thread(target=completion, args=(self.grant_access, None), daemon=True).start()

    def default_list(self) -> StoreList | None:
        with self._lock:
            if self._default_list_id is None or self.denied:
                return None
            return self._lists.get(self._default_list_id)

    def __len__(self):
        with self._lock:
            return len(self._reminders)
