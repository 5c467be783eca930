import json
from datetime import date

import pytest
from django.test import Client, RequestFactory

from apps.core.exceptions import (
    ConflictError, DomainError, NotFoundError, PersistenceError, UnauthorizedError, ValidationError,
)
from apps.core.http import parse_json_body, parse_optional_date, parse_optional_int


@pytest.mark.parametrize("error,status", [
    (ValidationError("x"), 400),
    (NotFoundError("x"), 404),
    (UnauthorizedError("x"), 403),
    (ConflictError("x"), 409),
    (PersistenceError("x"), 500),
])
def test_status_codes(error, status):
    assert isinstance(error, DomainError)
    assert error.status_code == status


@pytest.mark.parametrize("value,expected", [
    (None, None),
    ('', None),
    ('2030-02-03', date(2030, 2, 3)),
    ('2030-02-03T22:15:00.000Z', date(2030, 2, 3)),
    (date(2030, 2, 3), date(2030, 2, 3)),
])
def test_parse_optional_date(value, expected):
    assert parse_optional_date(value, 'plannedDate') == expected


@pytest.mark.parametrize("value", ['soon', '2030-13-45', 20300203])
def test_parse_optional_date_rejects_garbage(value):
    with pytest.raises(ValidationError) as exc:
        parse_optional_date(value, 'plannedDate')
    assert 'plannedDate' in exc.value.message


def test_parse_optional_int():
    assert parse_optional_int('15', 'estimatedMinutes') == 15
    assert parse_optional_int(None, 'estimatedMinutes') is None
    for bad in ('abc', True):
        with pytest.raises(ValidationError):
            parse_optional_int(bad, 'estimatedMinutes')


@pytest.mark.parametrize("body", [b'{bad', b'[1, 2]', b'"text"'])
def test_parse_json_body_rejects_non_objects(body):
    request = RequestFactory().post('/', data=body, content_type='application/json')

    with pytest.raises(ValidationError):
        parse_json_body(request)


def test_parse_json_body_empty_is_empty_dict():
    request = RequestFactory().post('/', data=b'', content_type='application/json')

    assert parse_json_body(request) == {}


@pytest.mark.django_db
def test_health_check(client):
    response = client.get('/')

    assert response.status_code == 200
    assert response.json() == {'status': 'healthy', 'database': 'connected'}


@pytest.mark.django_db
class TestCsrf:
    def test_api_hands_out_csrf_cookie(self, user):
        client = Client(enforce_csrf_checks=True)
        client.force_login(user)

        client.get('/api/goals/')
        token = client.cookies['csrftoken'].value

        response = client.post(
            '/api/goals/',
            data=json.dumps({'title': 'Read more', 'targetDate': '2030-01-01'}),
            content_type='application/json',
            HTTP_X_CSRFTOKEN=token,
        )
        assert response.status_code == 201

    def test_write_without_token_is_rejected(self, user):
        client = Client(enforce_csrf_checks=True)
        client.force_login(user)

        response = client.post(
            '/api/goals/',
            data=json.dumps({'title': 'Read more', 'targetDate': '2030-01-01'}),
            content_type='application/json',
        )
        assert response.status_code == 403
