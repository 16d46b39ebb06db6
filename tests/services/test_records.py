import pytest

from edvora.core.errors import NotFound
from edvora.services.records import EventService, TaskService, reconcile_completion


@pytest.mark.parametrize(
    ('fields', 'current', 'expected'),
    [
        ({'status': 'completed'}, None, {'status': 'completed', 'completed': True}),
        ({'status': 'in-progress', 'completed': True}, None, {'status': 'in-progress', 'completed': False}),
        ({'completed': True}, {'status': 'pending'}, {'completed': True, 'status': 'completed'}),
        ({'completed': False}, {'status': 'completed'}, {'completed': False, 'status': 'pending'}),
        ({'completed': False}, {'status': 'overdue'}, {'completed': False}),
        ({'title': 'HW2'}, {'status': 'completed'}, {'title': 'HW2'}),
    ],
)
def test_reconcile_completion_treats_status_as_source_of_truth(fields, current, expected) -> None:
    assert reconcile_completion(fields, current) == expected


def test_task_service_create_applies_defaults(storage) -> None:
    task = TaskService(storage.tasks).create('user-a', {'title': 'HW1'})

    assert task['status'] == 'pending'
    assert task['completed'] is False
    assert task['type'] == 'assignment'
    assert task['priority'] == 'medium'
    assert task['tags'] == []


def test_task_service_update_keeps_completion_in_sync(storage) -> None:
    service = TaskService(storage.tasks)
    task = service.create('user-a', {'title': 'HW1'})

    completed = service.update('user-a', task['id'], {'completed': True})
    reopened = service.update('user-a', task['id'], {'status': 'in-progress'})

    assert completed['status'] == 'completed'
    assert reopened['completed'] is False


def test_task_service_hides_other_users_tasks(storage) -> None:
    service = TaskService(storage.tasks)
    task = service.create('user-a', {'title': 'HW1'})

    with pytest.raises(NotFound) as update_error:
        service.update('user-b', task['id'], {'title': 'stolen'})
    with pytest.raises(NotFound):
        service.delete('user-b', task['id'])

    assert update_error.value.message == 'Task not found'
    assert service.get('user-a', task['id'])['title'] == 'HW1'


def test_event_service_reports_missing_event(storage) -> None:
    with pytest.raises(NotFound) as exception_info:
        EventService(storage.events).delete('user-a', 'missing')

    assert exception_info.value.message == 'Event not found'
