import json

from remindbridge.reminders.model.reminderlist import ReminderList
from remindbridge.reminders.model.store import StoreList


class TestReminderList:

    def test_create_from_store(self):
        lst = ReminderList.create_from_store(StoreList("Home", "L1", "iCloud"))
        assert lst.title == "Home"
        assert lst.id == "L1"

    def test_to_json(self):
        success, data = ReminderList("Home", "L1").to_json()
        assert success is True
        assert json.loads(data) == {'title': 'Home', 'id': 'L1'}

    def test_to_json_array(self):
        lists = [ReminderList("Home", "L1"), ReminderList("Work", "L2")]
        success, data = ReminderList.to_json_array(lists)
        assert success is True
        assert json.loads(data) == [{'title': 'Home', 'id': 'L1'}, {'title': 'Work', 'id': 'L2'}]

    def test_to_json_fail(self):
        success, data = ReminderList.to_json_array([ReminderList(b"Home", "L1")])
        assert success is False
        assert data.startswith('Unable to encode reminder lists')

    def test___eq__(self):
        assert ReminderList("Home", "L1") == ReminderList("Home", "L1")
        assert ReminderList("Home", "L1") != ReminderList("Home", "L2")
        assert len({ReminderList("Home", "L1"), ReminderList("Home", "L1")}) == 1

    def test___str__(self):
        lst = ReminderList("Test_List", "L1")
        assert lst.__str__() == "Test_List"
        assert lst.__repr__() == "Test_List"
