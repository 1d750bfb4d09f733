"""
This is the main package for RemindBridge.

- ``reminders`` - the reminders store adapter and its model.
- ``channel`` - the method channel a host application talks to.
- ``cli`` - the RemindBridge command-line interface.
- ``helpers`` - configuration, logging and JSON helpers.

"""

from . import helpers

__all__ = ['helpers', ]
