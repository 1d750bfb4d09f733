"""
This is the reminders controller. It is the single gateway between a host application and the reminders store: it
requests authorization, resolves list and reminder IDs, and converts everything to and from JSON.

Operations which touch the store asynchronously return a :py:class:`~concurrent.futures.Future` resolving to a
``(success, data)`` tuple, where ``data`` is the result on success or an error message on failure. Each of these also
accepts a ``completion`` function, which is called exactly once with the same tuple on a worker thread.
"""
from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

from remindbridge import helpers
from remindbridge.reminders.model.reminder import Reminder
from remindbridge.reminders.model.reminderlist import ReminderList
from remindbridge.reminders.model.store import ReminderStore, StoreError, StoreList, StoreReminder

#: Returned when a reminder is saved to a list which does not exist.
INVALID_LIST = 'Invalid calendarID'

Completion = Callable[[Any], None]


class ReminderController:
    """
    Reads and writes reminders and reminder lists in a store on behalf of a host application.
    """

    def __init__(self, store: ReminderStore, workers: int = helpers.WORKERS):
        """
        Create a new controller. The store's default list is cached straight away, but permission is not requested.

        :param store: the reminders store.
        :param workers: the number of threads used for saves and deletions.
        """
        self.store: ReminderStore = store
        self._lock = threading.Lock()
        self._has_access: bool = False
        self._default_list: StoreList | None = store.default_list()
        self._permission_request: Future | None = None
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix='remindbridge')

    @property
    def has_access(self) -> bool:
        """
        True if the last permission request was granted.
        """
        with self._lock:
            return self._has_access

    @property
    def default_list(self) -> StoreList | None:
        """
        The cached default list for new reminders. This is refreshed by :py:meth:`request_permission` only, so it may be
        stale if the user changes their default list elsewhere.
        """
        with self._lock:
            return self._default_list

    @staticmethod
    def _notify(future: Future, completion: Completion | None) -> Future:
        if completion is not None:
            future.add_done_callback(lambda f: completion(f.result()))
        return future

    def _submit(self, fn: Callable, completion: Completion | None, *args) -> Future:
        return ReminderController._notify(self._executor.submit(fn, *args), completion)

    def request_permission(self, completion: Completion | None = None) -> Future:
        """
        Ask the store for read/write access to reminders. Uses the full-access model where the platform supports it, and
        the legacy model otherwise. Once answered, the cached default list is refreshed whether access was granted or
        not. A store error counts as access not being granted.

        Only one request is in flight at a time: calling this again before the first request is answered returns the
        same future.

        :param completion: called with True if access is granted.
        :return: a future resolving to True if access is granted.
        """
        with self._lock:
            if self._permission_request is not None:
                return ReminderController._notify(self._permission_request, completion)
            future = Future()
            self._permission_request = future
        ReminderController._notify(future, completion)

        def answered(granted: bool, error: Any) -> None:
            if error is not None:
                logging.warning('Reminder access request failed: {}'.format(error))
                granted = False
            default_list = self.store.default_list()
            with self._lock:
                self._has_access = bool(granted)
                self._default_list = default_list
                self._permission_request = None
            logging.debug('Reminder access granted: {}'.format(bool(granted)))
            future.set_result(bool(granted))

        try:
            if self.store.supports_full_access():
                self.store.request_full_access(answered)
            else:
                self.store.request_access(answered)
        except StoreError as e:
            answered(False, e)
        return future

    def get_default_list(self) -> str | None:
        """
        :return: the cached default list as a JSON object, or None if there is no default list.
        """
        default_list = self.default_list
        if default_list is None:
            return None
        success, data = ReminderList.create_from_store(default_list).to_json()
        return data if success else None

    def get_default_list_id(self) -> str | None:
        """
        :return: the ID of the cached default list, or None if there is no default list.
        """
        default_list = self.default_list
        return default_list.identifier if default_list is not None else None

    def get_all_lists(self) -> tuple[bool, str]:
        """
        Get every reminder list in the store.

        :returns:

            -success (:py:class:`bool`) - true if the lists are fetched and encoded successfully.

            -data (:py:class:`str`) - error message on failure, or a JSON array of lists.

        """
        lists = [ReminderList.create_from_store(lst) for lst in self.store.reminder_lists()]
        logging.debug('Found {} reminder lists'.format(len(lists)))
        return ReminderList.to_json_array(lists)

    def get_reminders(self, list_id: str | None = None, completion: Completion | None = None) -> Future:
        """
        Get the reminders in a list, or in every list if ``list_id`` is None. A ``list_id`` which does not exist is a
        failure, not an empty result.

        :param list_id: the ID of the list to fetch reminders from.
        :param completion: called with the result tuple.

        :returns: a future resolving to:

            -success (:py:class:`bool`) - true if the reminders are fetched and encoded successfully.

            -data (:py:class:`str`) - error message on failure, or a JSON array of reminders.

        """
        future = ReminderController._notify(Future(), completion)

        def fail(error: str, context: str | None = None) -> Future:
            logging.warning(error if context is None else '{0}: {1}'.format(context, error))
            future.set_result((False, error))
            return future

        lists = None
        try:
            if list_id is not None:
                store_list = self.store.list_with_id(list_id) if isinstance(list_id, str) else None
                if store_list is None:
                    return fail('Cannot find list with ID: {}'.format(list_id))
                lists = [store_list]

            predicate = self.store.predicate_for_reminders(lists)
            if predicate is None:
                return fail('Unable to build a reminder query for {}'.format(
                    lists if lists is not None else 'all lists'))
        except StoreError as e:
            return fail(str(e), 'Unable to query reminders')

        def fetched(items) -> None:
            try:
                reminders = [Reminder.create_from_store(item) for item in items]
            except (AttributeError, TypeError) as e:
                fail('Unable to read fetched reminders: {}'.format(e))
                return
            logging.debug('Fetched {} reminders'.format(len(reminders)))
            future.set_result(Reminder.to_json_array(reminders))

        try:
            self.store.fetch_reminders(predicate, fetched)
        except StoreError as e:
            if not future.done():
                fail(str(e), 'Unable to fetch reminders')
        return future

    def save_reminder(self, fields: dict | str, completion: Completion | None = None) -> Future:
        """
        Create or update a reminder. If ``fields`` contains the ``id`` of an existing reminder, that reminder is updated,
        otherwise a new one is created. Every attribute is overwritten: fields which are left out are reset, so the
        caller must always send the complete reminder.

        :param fields: the ``saveReminder`` request, either decoded or as JSON text.
        :param completion: called with the result tuple.

        :returns: a future resolving to:

            -success (:py:class:`bool`) - true if the reminder is saved.

            -data (:py:class:`str`) - error message on failure, or the reminder's ID.

        """
        return self._submit(self._save_reminder, completion, fields)

    def _save_reminder(self, fields: dict | str) -> tuple[bool, str]:
        if isinstance(fields, (str, bytes)):
            try:
                fields = json.loads(fields)
            except json.JSONDecodeError as e:
                error = 'Invalid reminder JSON: {}'.format(e)
                logging.warning(error)
                return False, error
        if not isinstance(fields, dict):
            error = 'Invalid reminder JSON: expected an object'
            logging.warning(error)
            return False, error

        list_id = fields.get('list')
        store_list = self.store.list_with_id(list_id) if isinstance(list_id, str) else None
        if store_list is None:
            logging.warning('Cannot save reminder to unknown list {}'.format(list_id))
            return False, INVALID_LIST

        item = None
        reminder_id = fields.get('id')
        if isinstance(reminder_id, str):
            found = self.store.item_with_id(reminder_id)
            if isinstance(found, StoreReminder):
                item = found
        if item is None:
            item = self.store.new_reminder()

        Reminder.apply_fields(item, store_list, fields)
        try:
            self.store.save_reminder(item, commit=True)
        except StoreError as e:
            logging.warning('Failed to save reminder {0}: {1}'.format(item, e))
            return False, str(e)
        logging.debug('Saved reminder {0} in {1}'.format(item.identifier, store_list))
        return True, item.identifier

    def save_reminder_list(self, title: str, completion: Completion | None = None) -> Future:
        """
        Create a new reminder list in the same account as the store's default list.

        :param title: the title of the new list.
        :param completion: called with the result tuple.

        :returns: a future resolving to:

            -success (:py:class:`bool`) - true if the list is created.

            -data (:py:class:`str`) - error message on failure, or the new list's ID.

        """
        return self._submit(self._save_reminder_list, completion, title)

    def _save_reminder_list(self, title: str) -> tuple[bool, str]:
        default_list = self.store.default_list()
        new_list = self.store.new_list(title, default_list.source if default_list is not None else None)
        try:
            self.store.save_list(new_list, commit=True)
        except StoreError as e:
            error = 'Failed to create reminder list {0}: {1}'.format(title, e)
            logging.warning(error)
            return False, error
        logging.debug('Created reminder list {0} ({1})'.format(title, new_list.identifier))
        return True, new_list.identifier

    def delete_reminder(self, reminder_id: str, completion: Completion | None = None) -> Future:
        """
        Delete a reminder.

        :param reminder_id: the ID of the reminder to delete.
        :param completion: called with the result tuple.

        :returns: a future resolving to:

            -success (:py:class:`bool`) - true if the reminder is deleted.

            -data (:py:class:`str`) - error message on failure, or success message.

        """
        return self._submit(self._delete_reminder, completion, reminder_id)

    def _delete_reminder(self, reminder_id: str) -> tuple[bool, str]:
        item = self.store.item_with_id(reminder_id) if isinstance(reminder_id, str) else None
        if not isinstance(item, StoreReminder):
            error = 'Cannot find reminder with ID: {}'.format(reminder_id)
            logging.warning(error)
            return False, error
        try:
            self.store.remove_reminder(item, commit=True)
        except StoreError as e:
            logging.warning('Failed to delete reminder {0}: {1}'.format(reminder_id, e))
            return False, str(e)
        debug_msg = 'Reminder {} deleted'.format(reminder_id)
        logging.debug(debug_msg)
        return True, debug_msg

    def shutdown(self, wait: bool = True) -> None:
        """
        Stop the worker threads. Saves and deletions already submitted are completed first if ``wait`` is True.
        """
        self._executor.shutdown(wait=wait)
