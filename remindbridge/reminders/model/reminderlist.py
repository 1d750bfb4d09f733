"""
Contains the ``ReminderList`` class, a read-only snapshot of a reminder list as it is sent to the host application.
"""

from __future__ import annotations

from typing import List

import remindbridge.reminders.model.store as store
from remindbridge import helpers


class ReminderList:
    """
    Represents a reminder list (a *calendar* in the store) at the time it was read.
    """

    def __init__(self, title: str, list_id: str):
        """
        Create a new reminder list snapshot.

        :param title: the display name of the list.
        :param list_id: the store-assigned ID of the list.
        """
        self.title: str = title
        self.id: str = list_id

    @staticmethod
    def create_from_store(store_list: store.StoreList) -> ReminderList:
        """
        Creates a snapshot of a list held by the store.

        :param store_list: the list to snapshot.
        :return: a ReminderList with the store list's title and ID.
        """
        return ReminderList(store_list.title, store_list.identifier)

    def to_dict(self) -> dict:
        return {'title': self.title, 'id': self.id}

    def to_json(self) -> tuple[bool, str]:
        """
        Returns this list as a JSON object.

        :returns:

            -success (:py:class:`bool`) - true if the list is successfully encoded.

            -data (:py:class:`str`) - error message on failure, or the JSON text.

        """
        return helpers.to_json(self.to_dict(), 'reminder list {}'.format(self.title))

    @staticmethod
    def to_json_array(lists: List[ReminderList]) -> tuple[bool, str]:
        """
        Returns the given lists as a JSON array, preserving their order.

        :param lists: the lists to encode.

        :returns:

            -success (:py:class:`bool`) - true if the lists are successfully encoded.

            -data (:py:class:`str`) - error message on failure, or the JSON text.

        """
        return helpers.to_json([lst.to_dict() for lst in lists], 'reminder lists')

    def __eq__(self, other):
        if not isinstance(other, ReminderList):
            return NotImplemented
        return self.id == other.id and self.title == other.title

    def __hash__(self):
        return hash((self.id, self.title))

    def __str__(self):
        return self.title

    def __repr__(self):
        return self.title
