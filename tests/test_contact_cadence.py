"""Tests for contact follow-up cadence."""

from datetime import date, datetime
from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.core import contact_cadence
from app.core.schemas_auth import User
from app.core.schemas_contacts import InteractionChannel
from app.main import app

TODAY = date(2025, 9, 24)
CONTACT_ID = str(uuid4())


@pytest.fixture(autouse=True)
def fixed_today():
    with patch("app.core.contact_cadence._today", return_value=TODAY):
        yield


def _contact_row(**overrides):
    row = {
        "id": CONTACT_ID,
        "user_id": "user-1",
        "name": "Ann Lee",
        "segment": "TOP5",
        "created_at": "2025-01-01T00:00:00+00:00",
        "updated_at": "2025-09-24T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def test_mark_sent_resets_touch_dates():
    with patch("app.db.contacts.update_contact", return_value=_contact_row()) as mock_update:
        with patch("app.db.interactions.log_interaction") as mock_log:
            contact_cadence.mark_sent("user-1", CONTACT_ID)

    mock_update.assert_called_once_with(
        "user-1", CONTACT_ID, {"last_touch": "2025-09-24", "next_touch": "2025-10-01"}
    )
    mock_log.assert_not_called()


def test_mark_sent_with_channel_logs_interaction():
    with patch("app.db.contacts.update_contact", return_value=_contact_row()):
        with patch("app.db.interactions.log_interaction") as mock_log:
            contact_cadence.mark_sent(
                "user-1", CONTACT_ID, channel=InteractionChannel.WHATSAPP, message_body="Hey!"
            )

    user_id, interaction = mock_log.call_args[0]
    assert user_id == "user-1"
    assert interaction.channel == InteractionChannel.WHATSAPP
    assert interaction.direction.value == "out"
    assert interaction.date == TODAY
    assert str(interaction.contact_id) == CONTACT_ID


def test_snooze_defaults_to_a_week():
    with patch("app.db.contacts.update_contact", return_value=_contact_row()) as mock_update:
        contact_cadence.snooze_contact("user-1", CONTACT_ID)

    assert mock_update.call_args[0][2] == {"next_touch": "2025-10-01"}


def test_snooze_custom_days():
    with patch("app.db.contacts.update_contact", return_value=_contact_row()) as mock_update:
        contact_cadence.snooze_contact("user-1", CONTACT_ID, days=3)

    assert mock_update.call_args[0][2] == {"next_touch": "2025-09-27"}


def test_skip_moves_to_tomorrow():
    with patch("app.db.contacts.update_contact", return_value=_contact_row()) as mock_update:
        contact_cadence.skip_contact("user-1", CONTACT_ID)

    assert mock_update.call_args[0][2] == {"next_touch": "2025-09-25"}


def test_unknown_contact_raises_lookup_error():
    with patch("app.db.contacts.update_contact", return_value=None):
        with pytest.raises(LookupError):
            contact_cadence.skip_contact("user-1", CONTACT_ID)


def test_due_contacts_limited_by_user_capacity():
    user = User(
        id="user-1",
        name="Sam",
        daily_capacity=3,
        created_at=datetime(2025, 1, 1),
        updated_at=datetime(2025, 1, 1),
    )
    with patch("app.core.contact_cadence.get_user_by_id", return_value=user):
        with patch("app.db.contacts.list_due_contacts", return_value=[]) as mock_due:
            contact_cadence.get_due_contacts("user-1")

    mock_due.assert_called_once_with("user-1", TODAY, 3)


def test_due_contacts_default_capacity_without_user_row():
    with patch("app.core.contact_cadence.get_user_by_id", return_value=None):
        with patch("app.db.contacts.list_due_contacts", return_value=[]) as mock_due:
            contact_cadence.get_due_contacts("user-1")

    assert mock_due.call_args[0][2] == 8


def test_due_contacts_zero_capacity_skips_query():
    with patch("app.db.contacts.list_due_contacts") as mock_due:
        assert contact_cadence.get_due_contacts("user-1", limit=0) == []

    mock_due.assert_not_called()


class TestCadenceEndpoints:
    client = TestClient(app)

    def test_mark_sent_endpoint(self):
        row = _contact_row(last_touch="2025-09-24", next_touch="2025-10-01")
        with patch("app.db.contacts.update_contact", return_value=row):
            with patch("app.db.interactions.log_interaction") as mock_log:
                response = self.client.post(
                    f"/v1/contacts/{CONTACT_ID}/mark-sent",
                    json={"userId": "user-1", "channel": "email"},
                )

        assert response.status_code == 200
        assert response.json()["next_touch"] == "2025-10-01"
        mock_log.assert_called_once()

    def test_skip_unknown_contact_is_404(self):
        with patch("app.db.contacts.update_contact", return_value=None):
            response = self.client.post(f"/v1/contacts/{CONTACT_ID}/skip", json={"userId": "user-1"})

        assert response.status_code == 404

    def test_due_endpoint(self):
        rows = [_contact_row(next_touch="2025-09-20")]
        with patch("app.db.contacts.list_due_contacts", return_value=rows) as mock_due:
            response = self.client.get("/v1/contacts/due", params={"user_id": "user-1", "limit": 5})

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Ann Lee"]
        mock_due.assert_called_once_with("user-1", TODAY, 5)

    def test_interactions_endpoint(self):
        rows = [
            {
                "id": str(uuid4()),
                "user_id": "user-1",
                "contact_id": CONTACT_ID,
                "channel": "sms",
                "direction": "in",
                "date": "2025-09-23",
                "created_at": "2025-09-23T10:00:00+00:00",
            }
        ]
        mock_list = MagicMock(return_value=rows)
        with patch("app.api.contacts.list_interactions", mock_list):
            response = self.client.get(
                f"/v1/contacts/{CONTACT_ID}/interactions", params={"user_id": "user-1"}
            )

        assert response.status_code == 200
        assert response.json()[0]["channel"] == "sms"
