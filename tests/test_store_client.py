"""
Tests for the guest store routes and the HTTP client's error mapping
"""

import httpx
import pytest

from guest_console.core.errors import (
    AlreadyRespondedError,
    ConflictError,
    NotFoundError,
    TransientError,
    ValidationError,
)
from guest_console.services.store_client import GuestStoreClient

from conftest import WEDDING_ID

def test_create_then_fetch_round_trip(store):
    fields = {
        "wedding_id": WEDDING_ID,
        "full_name": "Jane Smith",
        "nickname": "Janie",
        "additional_names": ["Bob Smith", "Amy Smith"],
        "address": "12 Garden Road",
        "phone_number": "+62 812 0000",
        "tag": "Groom",
        "invited_by": "Mother",
        "num_attendees": 3,
    }

    created = store.create_guest(fields)
    fetched = store.get_guest(created.id)

    for key, value in fields.items():
        assert getattr(fetched, key) == value
    assert fetched.id == created.id

def test_new_guest_starts_unresponded_and_not_checked_in(make_guest):
    guest = make_guest()

    assert guest.is_attending is None
    assert guest.num_attendees_confirmed is None
    assert guest.attendance_confirmed is False
    assert guest.created_at is not None

def test_list_filters_by_wedding_and_invited_by(store, make_guest):
    make_guest(full_name="A", invited_by="Father")
    make_guest(full_name="B", invited_by="Mother")
    make_guest(full_name="C", wedding_id="another-wedding")

    assert {g.full_name for g in store.list_guests(WEDDING_ID)} == {"A", "B"}
    assert [g.full_name for g in store.list_guests(WEDDING_ID, invited_by="Mother")] == ["B"]

def test_get_unknown_guest_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.get_guest("00000000-0000-0000-0000-000000000000")

def test_path_characters_in_id_do_not_escape_the_route(store, make_guest):
    make_guest()

    with pytest.raises(NotFoundError):
        store.get_guest("../guests")

def test_patch_is_partial(store, make_guest):
    guest = make_guest(nickname="Johnny")

    updated = store.update_guest(guest.id, {"phone_number": "123"})

    assert updated.phone_number == "123"
    assert updated.nickname == "Johnny"
    assert updated.full_name == "John Doe"

def test_patch_confirmed_above_capacity_is_conflict(store, make_guest):
    guest = make_guest(num_attendees=2)

    with pytest.raises(ConflictError):
        store.update_guest(guest.id, {"is_attending": True, "num_attendees_confirmed": 3})

    assert store.get_guest(guest.id).is_attending is None

def test_lowering_capacity_below_confirmed_is_conflict(store, make_guest):
    guest = make_guest(num_attendees=4)
    store.update_guest(guest.id, {"is_attending": True, "num_attendees_confirmed": 3})

    with pytest.raises(ConflictError):
        store.update_guest(guest.id, {"num_attendees": 2})

def test_invalid_payload_maps_to_validation_error(store, make_guest):
    guest = make_guest()

    with pytest.raises(ValidationError):
        store.update_guest(guest.id, {"num_attendees": 0})
    with pytest.raises(ValidationError):
        store.update_guest(guest.id, {"full_name": None})

def test_delete_is_terminal(store, make_guest):
    guest = make_guest()

    store.delete_guest(guest.id)

    with pytest.raises(NotFoundError):
        store.get_guest(guest.id)
    with pytest.raises(NotFoundError):
        store.delete_guest(guest.id)

def test_wishes_put_requesting_guest_first(store, make_guest):
    first = make_guest(full_name="First")
    second = make_guest(full_name="Second")
    make_guest(full_name="Silent")
    store.update_guest(first.id, {"wish": "Congrats!"})
    store.update_guest(second.id, {"wish": "Happy wedding"})

    wishes = store.list_wishes(second.id)

    assert [w.full_name for w in wishes] == ["Second", "First"]

def mock_client(handler) -> GuestStoreClient:
    return GuestStoreClient(httpx.Client(base_url="http://store", transport=httpx.MockTransport(handler)))

def test_server_error_maps_to_transient():
    client = mock_client(lambda request: httpx.Response(503, text="upstream down"))

    with pytest.raises(TransientError) as excinfo:
        client.get_guest("abc")

    assert "upstream down" not in excinfo.value.message

def test_network_failure_maps_to_transient():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransientError):
        mock_client(handler).list_guests(WEDDING_ID)

def test_store_error_text_is_not_in_user_message():
    client = mock_client(lambda request: httpx.Response(409, json={"message": "row 42 locked"}))

    with pytest.raises(ConflictError) as excinfo:
        client.update_guest("abc", {"wish": "x"})

    assert "row 42" not in excinfo.value.message
    assert "row 42" in excinfo.value.internal

def test_list_body_for_single_guest_is_transient():
    client = mock_client(lambda request: httpx.Response(200, json={"success": True, "data": [{"id": "x"}]}))

    with pytest.raises(TransientError):
        client.get_guest("abc")

def test_malformed_record_is_transient():
    client = mock_client(lambda request: httpx.Response(200, json={"success": True, "data": {"id": "abc"}}))

    with pytest.raises(TransientError):
        client.get_guest("abc")

def test_redirect_is_transient():
    client = mock_client(lambda request: httpx.Response(307, headers={"location": "/guests/abc"}))

    with pytest.raises(TransientError):
        client.get_guest("abc")

def test_conditional_patch_refuses_answered_guest(store, make_guest):
    guest = make_guest()
    store.update_guest(guest.id, {"is_attending": False, "num_attendees_confirmed": 0}, if_unanswered=True)

    with pytest.raises(AlreadyRespondedError):
        store.update_guest(guest.id, {"is_attending": True, "num_attendees_confirmed": 1}, if_unanswered=True)

    assert store.get_guest(guest.id).is_attending is False

def test_unconditional_patch_still_overrides_answer(store, make_guest):
    guest = make_guest()
    store.update_guest(guest.id, {"is_attending": False, "num_attendees_confirmed": 0}, if_unanswered=True)

    updated = store.update_guest(guest.id, {"is_attending": True, "num_attendees_confirmed": 2})

    assert updated.is_attending is True
    assert updated.num_attendees_confirmed == 2
