"""
This is the model of the reminders part of RemindBridge. Here, you'll find the following:

- ``reminder.py`` - Contains the ``Reminder`` class which represents a reminder as sent to the host, and the ``DueDate``
class which represents a partial due date.
- ``reminderlist.py`` - Contains the ``ReminderList`` class which represents a reminder list as sent to the host.
- ``store.py`` - Contains the ``ReminderStore`` class which describes a reminders store, and the records it holds.
- ``memorystore.py`` - Contains the ``MemoryStore`` class, an in-memory reminders store.
- ``eventkitstore.py`` - Contains the ``EventKitStore`` class, the macOS reminders store. It is not imported here since it
requires PyObjC.

"""

from . import store, reminderlist, reminder, memorystore

__all__ = ['store', 'reminderlist', 'reminder', 'memorystore', ]
