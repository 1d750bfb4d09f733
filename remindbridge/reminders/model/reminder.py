"""
Contains the ``Reminder`` class, a snapshot of a reminder as it is sent to the host application, and the ``DueDate``
class, which represents a partial date.
"""

from __future__ import annotations

from typing import List

import remindbridge.reminders.model.store as store
from remindbridge import helpers
from remindbridge.reminders.model.reminderlist import ReminderList


class DueDate:
    """
    A due date made of independently optional components. A due date of ``2024-04-18`` with no time is stored with
    ``hour``, ``minute`` and ``second`` set to None.
    """

    #: Names of the components, in the order they are written.
    COMPONENTS = ('year', 'month', 'day', 'hour', 'minute', 'second')

    def __init__(self,
                 year: int | None = None,
                 month: int | None = None,
                 day: int | None = None,
                 hour: int | None = None,
                 minute: int | None = None,
                 second: int | None = None):
        self.year: int | None = year
        self.month: int | None = month
        self.day: int | None = day
        self.hour: int | None = hour
        self.minute: int | None = minute
        self.second: int | None = second

    @staticmethod
    def from_dict(values) -> DueDate | None:
        """
        Creates a due date from a ``dueDate`` JSON object. Every value in the object must be an integer, otherwise the
        object is not a due date at all.

        :param values: the decoded ``dueDate`` object.
        :return: the due date, or None if ``values`` is not a valid due date object.
        """
        if not isinstance(values, dict):
            return None
        for value in values.values():
            if not helpers.is_int(value):
                return None
        return DueDate(**{c: values.get(c) for c in DueDate.COMPONENTS})

    def to_dict(self) -> dict:
        """
        :return: the components which are set. Unset components are left out.
        """
        return {c: getattr(self, c) for c in DueDate.COMPONENTS if getattr(self, c) is not None}

    def __eq__(self, other):
        if not isinstance(other, DueDate):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self):
        return str(self.to_dict())

    def __repr__(self):
        return 'DueDate({})'.format(self.to_dict())


class Reminder:
    """
    Represents a reminder at the time it was read from the store, including a snapshot of the list it was in.
    """

    def __init__(self,
                 reminder_list: ReminderList,
                 reminder_id: str,
                 title: str | None,
                 due_date: DueDate | None = None,
                 priority: int = 0,
                 completed: bool = False,
                 notes: str | None = None,
                 ):
        """
        Create a new reminder snapshot.

        :param reminder_list: the list the reminder was in when it was read.
        :param reminder_id: the store-assigned ID of the reminder.
        :param title: the title of the reminder.
        :param due_date: the (possibly partial) date the reminder is due.
        :param priority: the store's priority value. This is not validated.
        :param completed: True if the reminder has been completed.
        :param notes: free-text notes attached to the reminder.
        """
        self.reminder_list: ReminderList = reminder_list
        self.id: str = reminder_id
        self.title: str | None = title
        self.due_date: DueDate | None = due_date
        self.priority: int = priority
        self.completed: bool = completed
        self.notes: str | None = notes

    @staticmethod
    def create_from_store(item: store.StoreReminder) -> Reminder:
        """
        Creates a snapshot of a reminder held by the store.

        :param item: the store reminder.
        :return: a Reminder representing the store reminder and its list.
        """
        return Reminder(
            reminder_list=ReminderList.create_from_store(item.store_list),
            reminder_id=item.identifier,
            title=item.title,
            due_date=item.due_date,
            priority=item.priority,
            completed=item.completed,
            notes=item.notes
        )

    @staticmethod
    def apply_fields(item: store.StoreReminder, store_list: store.StoreList, fields: dict) -> None:
        """
        Overwrites every mutable attribute of ``item`` from a ``saveReminder`` request. Fields which are missing, or
        which have the wrong type, are reset to their defaults rather than left untouched.

        :param item: the store reminder to update.
        :param store_list: the list the reminder should be in.
        :param fields: the decoded ``saveReminder`` request.
        """
        title = fields.get('title')
        priority = fields.get('priority')
        completed = fields.get('isCompleted')
        notes = fields.get('notes')

        item.store_list = store_list
        item.title = title if isinstance(title, str) else None
        item.priority = priority if helpers.is_int(priority) else 0
        item.completed = completed if isinstance(completed, bool) else False
        item.notes = notes if isinstance(notes, str) else None
        item.due_date = DueDate.from_dict(fields.get('dueDate'))

    def to_dict(self) -> dict:
        return {
            'list': self.reminder_list.to_dict(),
            'id': self.id,
            'title': self.title,
            'dueDate': self.due_date.to_dict() if self.due_date is not None else None,
            'priority': self.priority,
            'isCompleted': self.completed,
            'notes': self.notes
        }

    @staticmethod
    def to_json_array(reminders: List[Reminder]) -> tuple[bool, str]:
        """
        Returns the given reminders as a JSON array, preserving their order.

        :param reminders: the reminders to encode.

        :returns:

            -success (:py:class:`bool`) - true if the reminders are successfully encoded.

            -data (:py:class:`str`) - error message on failure, or the JSON text.

        """
        return helpers.to_json([r.to_dict() for r in reminders], 'reminders')

    def __str__(self):
        return self.title or ''

    def __repr__(self):
        return self.title or ''
