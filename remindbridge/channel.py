"""
Contains the ``MethodChannel`` class, which lets a host application call the reminders controller by method name and get
JSON responses back.

A request is a JSON object such as ``{"id": 7, "method": "getReminders", "arguments": {"id": "<list id>"}}``. The
response always says whether the call succeeded::

    {"id": 7, "method": "getReminders", "success": true, "result": [...]}
    {"id": 7, "method": "getReminders", "success": false, "error": "Cannot find list with ID: ..."}

The request ``id`` is optional and is only echoed back so the host can match responses to requests.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict

from remindbridge.reminders.controller import ReminderController


class MethodChannel:
    """
    Dispatches host method calls to a :py:class:`~remindbridge.reminders.controller.ReminderController`. Calls wait for
    the controller to finish, so a channel handles one call at a time per thread.
    """

    def __init__(self, controller: ReminderController):
        """
        Create a new method channel.

        :param controller: the controller which carries out the calls.
        """
        self.controller: ReminderController = controller
        self.handlers: Dict[str, Callable[[Any], tuple[bool, Any]]] = {
            'requestPermission': self.request_permission,
            'hasAccess': self.has_access,
            'getDefaultList': self.get_default_list,
            'getDefaultListId': self.get_default_list_id,
            'getAllLists': self.get_all_lists,
            'getReminders': self.get_reminders,
            'saveReminder': self.save_reminder,
            'saveReminderList': self.save_reminder_list,
            'deleteReminder': self.delete_reminder,
        }

    @staticmethod
    def _argument(arguments: Any, key: str) -> Any:
        if isinstance(arguments, dict):
            return arguments.get(key)
        if isinstance(arguments, str):
            return arguments
        return None

    @staticmethod
    def _decoded(result: tuple[bool, str | None]) -> tuple[bool, Any]:
        success, data = result
        if not success or data is None:
            return success, data
        return True, json.loads(data)

    def request_permission(self, arguments: Any) -> tuple[bool, bool]:
        return True, self.controller.request_permission().result()

    def has_access(self, arguments: Any) -> tuple[bool, bool]:
        return True, self.controller.has_access

    def get_default_list(self, arguments: Any) -> tuple[bool, Any]:
        return MethodChannel._decoded((True, self.controller.get_default_list()))

    def get_default_list_id(self, arguments: Any) -> tuple[bool, str | None]:
        return True, self.controller.get_default_list_id()

    def get_all_lists(self, arguments: Any) -> tuple[bool, Any]:
        return MethodChannel._decoded(self.controller.get_all_lists())

    def get_reminders(self, arguments: Any) -> tuple[bool, Any]:
        list_id = MethodChannel._argument(arguments, 'id')
        if list_id is not None and not isinstance(list_id, str):
            return False, 'getReminders requires a string id'
        return MethodChannel._decoded(self.controller.get_reminders(list_id).result())

    def save_reminder(self, arguments: Any) -> tuple[bool, str]:
        fields = arguments.get('json', arguments) if isinstance(arguments, dict) else arguments
        return self.controller.save_reminder(fields).result()

    def save_reminder_list(self, arguments: Any) -> tuple[bool, str]:
        title = MethodChannel._argument(arguments, 'title')
        if not isinstance(title, str):
            return False, 'saveReminderList requires a title'
        return self.controller.save_reminder_list(title).result()

    def delete_reminder(self, arguments: Any) -> tuple[bool, str]:
        reminder_id = MethodChannel._argument(arguments, 'id')
        if not isinstance(reminder_id, str):
            return False, 'deleteReminder requires an id'
        return self.controller.delete_reminder(reminder_id).result()

    def handle(self, method: str, arguments: Any = None) -> dict:
        """
        Call a method.

        :param method: the name of the method, e.g. ``getAllLists``.
        :param arguments: the method's arguments.
        :return: the response object.
        """
        handler = self.handlers.get(method)
        if handler is None:
            error = 'Unknown method: {0}. Valid: {1}'.format(method, list(self.handlers.keys()))
            logging.warning(error)
            return {'method': method, 'success': False, 'error': error}

        logging.debug('Handling {}'.format(method))
        success, data = handler(arguments if arguments is not None else {})
        if success:
            return {'method': method, 'success': True, 'result': data}
        return {'method': method, 'success': False, 'error': data}

    def handle_json(self, line: str) -> str:
        """
        Call a method described by a JSON request.

        :param line: the JSON request.
        :return: the JSON response.
        """
        try:
            request = json.loads(line)
        except json.JSONDecodeError as e:
            error = 'Invalid JSON: {}'.format(e)
            logging.warning(error)
            return json.dumps({'method': None, 'success': False, 'error': error})
        if not isinstance(request, dict) or not isinstance(request.get('method'), str):
            return json.dumps({'method': None, 'success': False, 'error': 'Request must be an object with a method'})

        response = self.handle(request['method'], request.get('arguments'))
        if 'id' in request:
            response = {'id': request['id'], **response}
        return json.dumps(response)
