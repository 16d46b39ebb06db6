def _event(**overrides) -> dict:
    event = {
        'title': 'Algorithms lecture',
        'description': 'Dynamic programming',
        'date': '2025-01-06',
        'startTime': '09:00',
        'endTime': '10:30',
        'type': 'class',
        'color': '#336699',
    }
    event.update(overrides)
    return event


def test_create_and_list_events(auth_headers, client) -> None:
    headers = auth_headers()

    created = client.post('/api/events', headers=headers, json=_event())
    listed = client.get('/api/events', headers=headers)

    assert created.status_code == 201
    event = created.json()['event']
    for key, value in _event().items():
        assert event[key] == value
    assert [item['id'] for item in listed.json()['events']] == [event['id']]
    assert listed.json()['events'][0]['startTime'] == '09:00'


def test_create_event_applies_defaults(auth_headers, client) -> None:
    event = client.post(
        '/api/events',
        headers=auth_headers(),
        json={'title': 'Study group', 'date': '2025-01-07'},
    ).json()['event']

    assert event['type'] == 'class'
    assert event['color'] == '#667eea'
    assert event['description'] == ''


def test_events_filter_by_month(auth_headers, client) -> None:
    headers = auth_headers()
    client.post('/api/events', headers=headers, json=_event(title='January', date='2025-01-20'))
    client.post('/api/events', headers=headers, json=_event(title='February', date='2025-02-03'))

    response = client.get('/api/events', headers=headers, params={'month': '2025-02'})

    assert [event['title'] for event in response.json()['events']] == ['February']


def test_events_reject_malformed_month(auth_headers, client) -> None:
    response = client.get('/api/events', headers=auth_headers(), params={'month': 'Feb'})

    assert response.status_code == 400


def test_create_event_validates_input(auth_headers, client) -> None:
    headers = auth_headers()

    no_date = client.post('/api/events', headers=headers, json={'title': 'x'})
    bad_time = client.post('/api/events', headers=headers, json=_event(startTime='9am'))
    bad_type = client.post('/api/events', headers=headers, json=_event(type='party'))

    assert no_date.status_code == bad_time.status_code == bad_type.status_code == 400


def test_update_and_delete_event(auth_headers, client) -> None:
    headers = auth_headers()
    event_id = client.post('/api/events', headers=headers, json=_event()).json()['event']['id']

    updated = client.put(f'/api/events/{event_id}', headers=headers, json={'endTime': '11:00', 'type': 'exam'})
    deleted = client.delete(f'/api/events/{event_id}', headers=headers)

    assert updated.status_code == 200
    assert updated.json()['event']['endTime'] == '11:00'
    assert updated.json()['event']['type'] == 'exam'
    assert updated.json()['event']['startTime'] == '09:00'
    assert deleted.json() == {'success': True, 'message': 'Event deleted successfully'}
    assert client.get('/api/events', headers=headers).json()['events'] == []


def test_events_are_invisible_to_other_users(auth_headers, client) -> None:
    alice = auth_headers()
    bob = auth_headers(username='bob', email='b@x.com')
    event_id = client.post('/api/events', headers=alice, json=_event()).json()['event']['id']

    assert client.get('/api/events', headers=bob).json()['events'] == []
    assert client.put(f'/api/events/{event_id}', headers=bob, json={'title': 'x'}).status_code == 404
    assert client.delete(f'/api/events/{event_id}', headers=bob).status_code == 404
    assert len(client.get('/api/events', headers=alice).json()['events']) == 1
