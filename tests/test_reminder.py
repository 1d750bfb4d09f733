import json

from remindbridge.reminders.model.reminder import DueDate, Reminder
from remindbridge.reminders.model.reminderlist import ReminderList
from remindbridge.reminders.model.store import StoreList, StoreReminder


class TestReminder:

    @staticmethod
    def __create_store_reminder() -> StoreReminder:
        return StoreReminder(
            store_list=StoreList("Home", "L1", "Local"),
            identifier="R1",
            title="Buy milk",
            due_date=DueDate(2024, 4, 18, 18, 30),
            priority=1,
            completed=False,
            notes="Semi-skimmed"
        )

    def test_create_from_store(self):
        item = TestReminder.__create_store_reminder()
        reminder = Reminder.create_from_store(item)
        assert reminder.reminder_list == ReminderList("Home", "L1")
        assert reminder.id == item.identifier
        assert reminder.title == item.title
        assert reminder.due_date == item.due_date
        assert reminder.priority == item.priority
        assert reminder.completed == item.completed
        assert reminder.notes == item.notes

    def test_to_dict(self):
        reminder = Reminder.create_from_store(TestReminder.__create_store_reminder())
        assert reminder.to_dict() == {
            'list': {'title': 'Home', 'id': 'L1'},
            'id': 'R1',
            'title': 'Buy milk',
            'dueDate': {'year': 2024, 'month': 4, 'day': 18, 'hour': 18, 'minute': 30},
            'priority': 1,
            'isCompleted': False,
            'notes': 'Semi-skimmed'
        }

    def test_to_json_without_optionals(self):
        reminder = Reminder(ReminderList("Home", "L1"), "R1", None)
        success, data = Reminder.to_json_array([reminder])
        assert success is True
        assert json.loads(data) == [{
            'list': {'title': 'Home', 'id': 'L1'},
            'id': 'R1',
            'title': None,
            'dueDate': None,
            'priority': 0,
            'isCompleted': False,
            'notes': None
        }]

    def test_to_json_array(self):
        reminders = [Reminder(ReminderList("Home", "L1"), "R1", "One"),
                     Reminder(ReminderList("Work", "L2"), "R2", "Two")]
        success, data = Reminder.to_json_array(reminders)
        assert success is True
        assert [r['id'] for r in json.loads(data)] == ['R1', 'R2']

        success, data = Reminder.to_json_array([])
        assert success is True
        assert data == '[]'

    def test_to_json_fail(self):
        reminder = Reminder(ReminderList("Home", "L1"), "R1", object())
        success, data = Reminder.to_json_array([reminder])
        assert success is False
        assert data.startswith('Unable to encode reminders')

    def test_apply_fields(self):
        store_list = StoreList("Work", "L2", "Local")
        item = TestReminder.__create_store_reminder()
        Reminder.apply_fields(item, store_list, {
            'list': 'L2',
            'title': 'Call Bob',
            'priority': 5,
            'isCompleted': True,
            'notes': 'About the invoice',
            'dueDate': {'year': 2024, 'month': 5, 'day': 1}
        })
        assert item.store_list is store_list
        assert item.identifier == "R1"
        assert item.title == 'Call Bob'
        assert item.priority == 5
        assert item.completed is True
        assert item.notes == 'About the invoice'
        assert item.due_date == DueDate(2024, 5, 1)

    def test_apply_fields_resets_missing(self):
        store_list = StoreList("Home", "L1", "Local")
        item = TestReminder.__create_store_reminder()
        Reminder.apply_fields(item, store_list, {'list': 'L1'})
        assert item.title is None
        assert item.priority == 0
        assert item.completed is False
        assert item.notes is None
        assert item.due_date is None

    def test_apply_fields_wrong_types(self):
        store_list = StoreList("Home", "L1", "Local")
        item = StoreReminder()
        Reminder.apply_fields(item, store_list, {
            'list': 'L1',
            'title': 42,
            'priority': True,
            'isCompleted': 'yes',
            'notes': ['a'],
            'dueDate': {'year': 2024, 'month': 'May'}
        })
        assert item.title is None
        assert item.priority == 0
        assert item.completed is False
        assert item.notes is None
        assert item.due_date is None

    def test___str__(self):
        reminder = Reminder(ReminderList("Home", "L1"), "R1", "Buy milk")
        assert reminder.__str__() == "Buy milk"
        assert Reminder(ReminderList("Home", "L1"), "R1", None).__str__() == ""


class TestDueDate:

    def test_from_dict(self):
        due_date = DueDate.from_dict({'year': 2024, 'month': 4, 'day': 18, 'hour': 9})
        assert due_date.year == 2024
        assert due_date.month == 4
        assert due_date.day == 18
        assert due_date.hour == 9
        assert due_date.minute is None
        assert due_date.second is None

    def test_from_dict_partial(self):
        due_date = DueDate.from_dict({'hour': 9, 'minute': 15})
        assert due_date.to_dict() == {'hour': 9, 'minute': 15}

    def test_from_dict_invalid(self):
        assert DueDate.from_dict(None) is None
        assert DueDate.from_dict("2024-04-18") is None
        assert DueDate.from_dict({'year': 2024, 'month': 4.5}) is None
        assert DueDate.from_dict({'year': 2024, 'day': False}) is None

    def test_from_dict_ignores_unknown_components(self):
        due_date = DueDate.from_dict({'year': 2024, 'weekday': 3})
        assert due_date.to_dict() == {'year': 2024}

    def test_to_dict_skips_unset(self):
        assert DueDate().to_dict() == {}
        assert DueDate(day=1, second=0).to_dict() == {'day': 1, 'second': 0}

    def test___eq__(self):
        assert DueDate(2024, 4, 18) == DueDate(2024, 4, 18)
        assert DueDate(2024, 4, 18) != DueDate(2024, 4, 18, 0)
        assert DueDate(2024) != "2024"
