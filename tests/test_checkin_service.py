"""
Tests for reception check-in
"""

from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from guest_console.core.errors import TransientError, UnknownTokenError
from guest_console.services.checkin_service import CheckInService
from guest_console.services.store_client import GuestStoreClient

@pytest.fixture
def checkin_service(store):
    return CheckInService(store)

def test_confirm_marks_guest_present(checkin_service, store, make_guest):
    guest = make_guest(full_name="Jane Smith", additional_names=["Bob Smith"], tag="Groom")

    result = checkin_service.confirm_attendance(guest.id)

    assert result.guest_id == guest.id
    assert result.display_name == "Jane Smith & Bob Smith"
    assert result.additional_names == ["Bob Smith"]
    assert result.tag == "Groom"
    assert result.was_already_checked_in is False
    assert store.get_guest(guest.id).attendance_confirmed is True

def test_confirm_twice_is_idempotent(checkin_service, store, make_guest):
    guest = make_guest(additional_names=["Jane Doe"])

    first = checkin_service.confirm_attendance(guest.id)
    second = checkin_service.confirm_attendance(guest.id)

    assert second.was_already_checked_in is True
    assert first.display_name == second.display_name
    assert first.additional_names == second.additional_names
    assert store.get_guest(guest.id).attendance_confirmed is True

def test_walk_in_without_rsvp_can_check_in(checkin_service, make_guest):
    guest = make_guest()

    result = checkin_service.confirm_attendance(guest.id)

    assert result.was_already_checked_in is False

@pytest.mark.parametrize("token", ["not-a-real-id", "", "00000000-0000-0000-0000-000000000000"])
def test_unknown_token_never_mutates(checkin_service, store, make_guest, token):
    guest = make_guest()
    before = store.get_guest(guest.id)

    with pytest.raises(UnknownTokenError):
        checkin_service.confirm_attendance(token)

    after = store.get_guest(guest.id)
    assert after.attendance_confirmed is False
    assert after.updated_at == before.updated_at

def test_token_must_match_exactly(checkin_service, make_guest):
    guest = make_guest()

    with pytest.raises(UnknownTokenError):
        checkin_service.confirm_attendance(guest.id.upper() + " ")

def test_unknown_token_is_distinct_from_network_failure():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    client = GuestStoreClient(httpx.Client(base_url="http://store", transport=httpx.MockTransport(handler)))

    with pytest.raises(TransientError):
        CheckInService(client).confirm_attendance("abc")

def test_concurrent_scans_both_succeed(fake_store):
    guest = fake_store.add(full_name="Jane Smith")
    service = CheckInService(fake_store)

    with ThreadPoolExecutor(max_workers=2) as pool:
        results = list(pool.map(service.confirm_attendance, [guest.id, guest.id]))

    assert len(results) == 2
    assert {r.display_name for r in results} == {"Jane Smith"}
    assert fake_store.get_guest(guest.id).attendance_confirmed is True

@pytest.mark.parametrize("suffix", ["/", "/wishes", "/../x", "?x=1", "%2F"])
def test_token_that_is_not_a_single_id_is_unknown(checkin_service, store, make_guest, suffix):
    guest = make_guest()

    with pytest.raises(UnknownTokenError):
        checkin_service.confirm_attendance(guest.id + suffix)

    assert store.get_guest(guest.id).attendance_confirmed is False

def test_malformed_tokens_never_reach_the_store():
    calls = []

    def handler(request):
        calls.append(request.url)
        return httpx.Response(500)

    client = GuestStoreClient(httpx.Client(base_url="http://store", transport=httpx.MockTransport(handler)))

    for token in ["abc/", "abc/wishes", "a b", "ñandu"]:
        with pytest.raises(UnknownTokenError):
            CheckInService(client).confirm_attendance(token)

    assert calls == []
