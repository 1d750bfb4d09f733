"""
This is the reminders part of RemindBridge. Here, you'll find the following:

- ``controller.py`` - Contains the ``ReminderController`` class, the gateway between a host application and the
reminders store.
- ``model`` - Contains the ``Reminder`` and ``ReminderList`` snapshots sent to the host, and the stores they are read from.

"""

from . import model
from . import controller

__all__ = ['model', 'controller', ]
