"""
Contains the ``EventKitStore`` class, which talks to the macOS reminders database through EventKit using
`PyObjC <https://pyobjc.readthedocs.io/>`_. Only available on macOS.
"""

from __future__ import annotations

from typing import Any, Callable, List

import EventKit
from Foundation import NSDateComponents, NSDateComponentUndefined

from remindbridge.reminders.model.reminder import DueDate
from remindbridge.reminders.model.store import ReminderStore, StoreError, StoreList, StoreReminder


class EventKitStore(ReminderStore):
    """
    A reminders store backed by an ``EKEventStore``. Lists and reminders are copied into store records when read, and
    written back to their ``EKCalendar`` / ``EKReminder`` when saved.
    """

    def __init__(self, event_store: Any = None):
        """
        Create a new EventKit store.

        :param event_store: the ``EKEventStore`` to use. A new one is created if not given.
        """
        self.event_store = event_store if event_store is not None else EventKit.EKEventStore.alloc().init()

    @staticmethod
    def _list_record(calendar: Any) -> StoreList | None:
        if calendar is None:
            return None
        return StoreList(str(calendar.title()), str(calendar.calendarIdentifier()), calendar.source(), calendar)

    @staticmethod
    def _due_date(components: Any) -> DueDate | None:
        if components is None:
            return None
        values = {}
        for name in DueDate.COMPONENTS:
            value = getattr(components, name)()
            values[name] = None if value == NSDateComponentUndefined else int(value)
        return DueDate(**values)

    @staticmethod
    def _date_components(due_date: DueDate | None) -> Any:
        if due_date is None:
            return None
        components = NSDateComponents.alloc().init()
        for name, value in due_date.to_dict().items():
            getattr(components, 'set{}_'.format(name.capitalize()))(value)
        return components

    def _reminder_record(self, reminder: Any) -> StoreReminder:
        title = reminder.title()
        notes = reminder.notes()
        return StoreReminder(
            store_list=self._list_record(reminder.calendar()),
            identifier=str(reminder.calendarItemIdentifier()),
            title=str(title) if title is not None else None,
            due_date=self._due_date(reminder.dueDateComponents()),
            priority=int(reminder.priority()),
            completed=bool(reminder.isCompleted()),
            notes=str(notes) if notes is not None else None,
            native=reminder
        )

    @staticmethod
    def _raise_on_error(success: bool, error: Any, action: str) -> None:
        if success:
            return
        if error is not None:
            raise StoreError(str(error.localizedDescription()))
        raise StoreError('Failed to {}.'.format(action))

    def reminder_lists(self) -> List[StoreList]:
        calendars = self.event_store.calendarsForEntityType_(EventKit.EKEntityTypeReminder) or []
        return [self._list_record(c) for c in calendars]

    def list_with_id(self, identifier: str) -> StoreList | None:
        return self._list_record(self.event_store.calendarWithIdentifier_(identifier))

    def item_with_id(self, identifier: str) -> Any:
        item = self.event_store.calendarItemWithIdentifier_(identifier)
        if item is None:
            return None
        if isinstance(item, EventKit.EKReminder):
            return self._reminder_record(item)
        return item

    def predicate_for_reminders(self, lists: List[StoreList] | None) -> Any:
        calendars = [lst.native for lst in lists] if lists is not None else None
        return self.event_store.predicateForRemindersInCalendars_(calendars)

    def fetch_reminders(self, predicate: Any, completion: Callable[[List[StoreReminder]], None]) -> None:
        def fetched(reminders):
            completion([self._reminder_record(r) for r in (reminders or [])])

        self.event_store.fetchRemindersMatchingPredicate_completion_(predicate, fetched)

    def new_reminder(self) -> StoreReminder:
        return StoreReminder(native=EventKit.EKReminder.reminderWithEventStore_(self.event_store))

    def save_reminder(self, reminder: StoreReminder, commit: bool = True) -> None:
        native = reminder.native
        if native is None:
            native = EventKit.EKReminder.reminderWithEventStore_(self.event_store)
            reminder.native = native
        native.setCalendar_(reminder.store_list.native if reminder.store_list is not None else None)
        native.setTitle_(reminder.title)
        native.setPriority_(reminder.priority)
        native.setCompleted_(reminder.completed)
        native.setNotes_(reminder.notes)
        native.setDueDateComponents_(self._date_components(reminder.due_date))

        success, error = self.event_store.saveReminder_commit_error_(native, commit, None)
        self._raise_on_error(success, error, 'save reminder')
        reminder.identifier = str(native.calendarItemIdentifier())

    def new_list(self, title: str, source: Any) -> StoreList:
        calendar = EventKit.EKCalendar.calendarForEntityType_eventStore_(EventKit.EKEntityTypeReminder,
                                                                         self.event_store)
        return StoreList(title, source=source, native=calendar)

    def save_list(self, store_list: StoreList, commit: bool = True) -> None:
        calendar = store_list.native
        calendar.setTitle_(store_list.title)
        calendar.setSource_(store_list.source)

        success, error = self.event_store.saveCalendar_commit_error_(calendar, commit, None)
        self._raise_on_error(success, error, 'save reminder list')
        store_list.identifier = str(calendar.calendarIdentifier())

    def remove_reminder(self, reminder: StoreReminder, commit: bool = True) -> None:
        success, error = self.event_store.removeReminder_commit_error_(reminder.native, commit, None)
        self._raise_on_error(success, error, 'remove reminder')

    def supports_full_access(self) -> bool:
        # macOS 14 introduced the full-access model and deprecated requestAccessToEntityType
        return hasattr(self.event_store, 'requestFullAccessToRemindersWithCompletion_')

    def request_full_access(self, completion: Callable[[bool, Any], None]) -> None:
        self.event_store.requestFullAccessToRemindersWithCompletion_(
            lambda granted, error: completion(bool(granted), error))

    def request_access(self, completion: Callable[[bool, Any], None]) -> None:
        self.event_store.requestAccessToEntityType_completion_(
            EventKit.EKEntityTypeReminder, lambda granted, error: completion(bool(granted), error))

    def default_list(self) -> StoreList | None:
        return self._list_record(self.event_store.defaultCalendarForNewReminders())
