"""Admin session state machine tests."""

from __future__ import annotations
import httpx
import pytest
import respx
from factories import API_URL, LIBRARIES_URL, entry_payload
from libhunt_admin.client import LibraryClient
from libhunt_admin.credentials import static_token
from libhunt_admin.errors import DialogStateError
from libhunt_admin.session import (
    AdminSession,
    DialogState,
    Notification,
    NotificationLog,
    create_session,
)


@pytest.fixture()
def notifications() -> NotificationLog:
    return NotificationLog()


@pytest.fixture()
def session(notifications: NotificationLog) -> AdminSession:
    admin = create_session(
        LibraryClient(base_url=API_URL),
        static_token("token"),
        refresh_after_import=False,
        notify=notifications,
    )
    with respx.mock(assert_all_called=True) as router:
        router.get(LIBRARIES_URL).mock(
            return_value=httpx.Response(
                200,
                json=[
                    entry_payload("1", name="React", category="Frontend Framework"),
                    entry_payload("2", name="Express"),
                ],
            )
        )
        assert admin.start()
    return admin


def test_start_failure_notifies(notifications: NotificationLog) -> None:
    admin = create_session(
        LibraryClient(base_url=API_URL), static_token(None), notify=notifications
    )
    with respx.mock(assert_all_called=True) as router:
        router.get(LIBRARIES_URL).mock(return_value=httpx.Response(500))
        assert not admin.start()
    assert notifications.last == Notification(
        "Error", "Failed to load libraries.", "destructive"
    )
    assert admin.store.entries == ()


@pytest.mark.parametrize(
    "body",
    [
        [1],
        [entry_payload("1", popularity="lots")],
        [entry_payload("1", supportedOS=5)],
    ],
)
def test_start_with_malformed_listing_notifies(
    notifications: NotificationLog, body: list[object]
) -> None:
    admin = create_session(
        LibraryClient(base_url=API_URL), static_token(None), notify=notifications
    )
    with respx.mock(assert_all_called=True) as router:
        router.get(LIBRARIES_URL).mock(return_value=httpx.Response(200, json=body))
        assert not admin.start()
    assert notifications.last == Notification(
        "Error", "Failed to load libraries.", "destructive"
    )
    assert admin.store.entries == ()


def test_malformed_create_response_notifies(
    session: AdminSession, notifications: NotificationLog
) -> None:
    session.open_create()
    for key in ("name", "category", "description"):
        session.set_field(key, "Prisma")

    with respx.mock(assert_all_called=True) as router:
        router.post(LIBRARIES_URL).mock(
            return_value=httpx.Response(
                201, json=entry_payload("3", popularity=[1])
            )
        )
        assert session.save() is None

    assert session.state is DialogState.CREATE_DRAFT
    assert len(session.store) == 2
    assert notifications.last == Notification(
        "Error", "Failed to save library.", "destructive"
    )


def test_create_with_missing_name_makes_no_request(
    session: AdminSession, notifications: NotificationLog
) -> None:
    session.open_create()
    session.set_field("name", "")
    session.set_field("category", "DB")
    session.set_field("description", "x")

    with respx.mock(assert_all_called=False) as router:
        route = router.post(LIBRARIES_URL)
        assert session.save() is None

    assert not route.called
    assert session.state is DialogState.CREATE_DRAFT
    assert notifications.last is not None
    assert notifications.last.title == "Missing Fields"
    assert notifications.last.is_error


def test_create_success_closes_dialog(
    session: AdminSession, notifications: NotificationLog
) -> None:
    session.open_create()
    for key, value in {
        "name": "Prisma",
        "category": "Database",
        "description": "ORM",
        "supportedOS": "Linux, macOS",
        "popularity.stars": "12",
    }.items():
        session.set_field(key, value)

    with respx.mock(assert_all_called=True) as router:
        route = router.post(LIBRARIES_URL).mock(
            return_value=httpx.Response(201, json=entry_payload("3", name="Prisma"))
        )
        saved = session.save()

    assert saved is not None and saved.id == "3"
    body = route.calls[0].request.content
    assert b'"supportedOS":["Linux","macOS"]' in body.replace(b" ", b"")
    assert session.state is DialogState.CLOSED
    assert session.buffer is None
    assert session.store.entries[-1].id == "3"
    assert notifications.last == Notification(
        "Created", "Library created successfully."
    )


def test_save_failure_keeps_draft_open(
    session: AdminSession, notifications: NotificationLog
) -> None:
    entry = session.store.get("2")
    assert entry is not None
    session.open_edit(entry)
    session.set_field("name", "Express 5")

    with respx.mock(assert_all_called=True) as router:
        router.put(f"{LIBRARIES_URL}/2").mock(return_value=httpx.Response(500))
        assert session.save() is None

    assert session.state is DialogState.EDIT_DRAFT
    assert session.target_id == "2"
    assert session.buffer is not None
    assert session.buffer.get("name") == "Express 5"
    assert session.store.get("2") is entry
    assert notifications.last == Notification(
        "Error", "Failed to save library.", "destructive"
    )


def test_edit_success_updates_store(session: AdminSession) -> None:
    entry = session.store.get("1")
    assert entry is not None
    session.open_edit(entry)
    session.set_field("version", "19.0.0")

    with respx.mock(assert_all_called=True) as router:
        route = router.put(f"{LIBRARIES_URL}/1").mock(
            return_value=httpx.Response(
                200, json=entry_payload("1", name="React", version="19.0.0")
            )
        )
        session.save()

    assert b'"_id"' not in route.calls[0].request.content
    updated = session.store.get("1")
    assert updated is not None and updated.version == "19.0.0"
    assert session.state is DialogState.CLOSED


def test_delete_failure_closes_dialog_and_keeps_entry(
    session: AdminSession, notifications: NotificationLog
) -> None:
    entry = session.store.get("1")
    assert entry is not None
    session.request_delete(entry)
    assert session.state is DialogState.CONFIRMING_DELETE
    assert session.pending_delete is entry

    with respx.mock(assert_all_called=True) as router:
        router.delete(f"{LIBRARIES_URL}/1").mock(return_value=httpx.Response(500))
        assert not session.confirm_delete()

    assert session.state is DialogState.CLOSED
    assert session.store.get("1") is entry
    assert notifications.last == Notification(
        "Error", "Failed to delete library.", "destructive"
    )


def test_delete_success(session: AdminSession, notifications: NotificationLog) -> None:
    entry = session.store.get("2")
    assert entry is not None
    session.request_delete(entry)
    with respx.mock(assert_all_called=True) as router:
        router.delete(f"{LIBRARIES_URL}/2").mock(return_value=httpx.Response(204))
        assert session.confirm_delete()
    assert [e.id for e in session.store.entries] == ["1"]
    assert notifications.last == Notification(
        "Deleted", "Library deleted successfully."
    )


def test_cancel_discards_draft(session: AdminSession) -> None:
    session.open_create()
    session.set_field("name", "Draft")
    session.cancel()
    assert session.state is DialogState.CLOSED
    assert session.buffer is None
    assert len(session.store) == 2


def test_invalid_transitions_raise(session: AdminSession) -> None:
    with pytest.raises(DialogStateError):
        session.save()
    with pytest.raises(DialogStateError):
        session.confirm_delete()

    session.open_create()
    entry = session.store.get("1")
    assert entry is not None
    with pytest.raises(DialogStateError):
        session.open_edit(entry)
    with pytest.raises(DialogStateError):
        session.request_delete(entry)


def test_drafts_cannot_be_edited_or_deleted(
    session: AdminSession, make_entry
) -> None:
    draft = make_entry(None)
    with pytest.raises(DialogStateError):
        session.open_edit(draft)
    with pytest.raises(DialogStateError):
        session.request_delete(draft)


def test_import_invalid_format_notifies(
    session: AdminSession, notifications: NotificationLog
) -> None:
    with respx.mock(assert_all_called=False) as router:
        route = router.post(f"{LIBRARIES_URL}/bulk")
        assert session.import_file(b'{"a":1}') is None
    assert not route.called
    assert notifications.last == Notification(
        "Invalid Format",
        "JSON must be an array of library objects.",
        "destructive",
    )


def test_import_malformed_notifies(
    session: AdminSession, notifications: NotificationLog
) -> None:
    assert session.import_file(b"[1, 2") is None
    assert notifications.last is not None
    assert notifications.last.title == "Upload Failed"


def test_import_success_notifies_and_keeps_dialog_state(
    session: AdminSession, notifications: NotificationLog
) -> None:
    session.open_create()
    with respx.mock(assert_all_called=True) as router:
        router.post(f"{LIBRARIES_URL}/bulk").mock(
            return_value=httpx.Response(201, json=[{}, {}])
        )
        result = session.import_file(b"[{}, {}]")
    assert result is not None and result.created_count == 2
    assert session.state is DialogState.CREATE_DRAFT
    assert notifications.last == Notification(
        "Upload Successful", "2 libraries added to the database."
    )


def test_import_rejection_surfaces_server_message(
    session: AdminSession, notifications: NotificationLog
) -> None:
    with respx.mock(assert_all_called=True) as router:
        router.post(f"{LIBRARIES_URL}/bulk").mock(
            return_value=httpx.Response(400, json={"error": "name is required"})
        )
        session.import_file(b"[{}]")
    assert notifications.last == Notification(
        "Upload Failed", "name is required", "destructive"
    )
