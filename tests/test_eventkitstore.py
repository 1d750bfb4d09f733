import threading

import pytest
from decouple import config

from remindbridge.reminders.controller import ReminderController
from remindbridge.reminders.model.reminder import DueDate
from remindbridge.reminders.model.store import StoreReminder

TEST_ENV = config('TEST_ENV', default='remote')

pytestmark = pytest.mark.skipif(TEST_ENV != 'local', reason="Requires Mac system with access to Reminders")

TIMEOUT = 30


class TestEventKitStore:

    @staticmethod
    def __create_store():
        from remindbridge.reminders.model.eventkitstore import EventKitStore
        store = EventKitStore()
        controller = ReminderController(store)
        assert controller.request_permission().result(TIMEOUT) is True
        controller.shutdown()
        return store

    def test_date_components(self):
        from remindbridge.reminders.model.eventkitstore import EventKitStore
        due_date = DueDate(2024, 4, 18, 9)
        components = EventKitStore._date_components(due_date)
        assert EventKitStore._due_date(components) == due_date
        assert EventKitStore._date_components(None) is None
        assert EventKitStore._due_date(None) is None

    def test_reminder_lists(self):
        store = TestEventKitStore.__create_store()
        lists = store.reminder_lists()
        assert len(lists) > 0
        default_list = store.default_list()
        assert default_list.identifier in [lst.identifier for lst in lists]
        assert store.list_with_id(default_list.identifier).title == default_list.title
        assert store.list_with_id('missing') is None

    def test_save_fetch_remove(self):
        store = TestEventKitStore.__create_store()
        reminder = store.new_reminder()
        reminder.store_list = store.default_list()
        reminder.title = 'RemindBridge test reminder'
        reminder.priority = 1
        reminder.due_date = DueDate(2024, 4, 18)
        store.save_reminder(reminder)
        assert reminder.identifier is not None

        found = store.item_with_id(reminder.identifier)
        assert isinstance(found, StoreReminder)
        assert found.title == 'RemindBridge test reminder'
        assert found.priority == 1
        assert found.due_date == DueDate(2024, 4, 18)

        done = threading.Event()
        fetched = []

        def completion(items):
            fetched.extend(items)
            done.set()

        store.fetch_reminders(store.predicate_for_reminders([store.default_list()]), completion)
        assert done.wait(TIMEOUT)
        assert reminder.identifier in [r.identifier for r in fetched]

        store.remove_reminder(found)
        assert store.item_with_id(reminder.identifier) is None
