import pytest
from sqlalchemy import select

from jobswipe.models import Notification


@pytest.fixture
def notify(db):
    def make(user, title="Heads up", is_read=False):
        note = Notification(user_id=user.id, type="system", title=title, body=f"{title} body", is_read=is_read)
        db.add(note)
        db.commit()
        db.refresh(note)
        return note

    return make


def test_list_is_newest_first_with_unread_count(client_for, notify, seeker):
    notify(seeker, "first")
    notify(seeker, "second", is_read=True)
    notify(seeker, "third")

    body = client_for(seeker).get("/notifications").json()

    assert [n["title"] for n in body["notifications"]] == ["third", "second", "first"]
    assert body["unreadCount"] == 2
    assert body["notifications"][0]["message"] == "third body"


def test_list_filters_unread_and_limits(client_for, notify, seeker):
    notify(seeker, "first")
    notify(seeker, "second", is_read=True)
    notify(seeker, "third")
    client = client_for(seeker)

    unread = client.get("/notifications", params={"unreadOnly": "true"}).json()
    limited = client.get("/notifications", params={"limit": 1}).json()

    assert [n["title"] for n in unread["notifications"]] == ["third", "first"]
    assert [n["title"] for n in limited["notifications"]] == ["third"]
    assert limited["unreadCount"] == 2


def test_list_never_shows_other_users(client_for, notify, seeker, recruiter):
    notify(recruiter, "private")

    body = client_for(seeker).get("/notifications").json()

    assert body == {"notifications": [], "unreadCount": 0}


def test_mark_read_ignores_foreign_ids(db, client_for, notify, seeker, recruiter):
    mine = notify(seeker)
    theirs = notify(recruiter)

    response = client_for(seeker).put(
        "/notifications", json={"notificationIds": [str(mine.id), str(theirs.id)]}
    )

    assert response.json() == {"success": True, "updated": 1}
    db.expire_all()
    assert db.get(Notification, mine.id).is_read is True
    assert db.get(Notification, mine.id).read_at is not None
    assert db.get(Notification, theirs.id).is_read is False


def test_mark_all_read(db, client_for, notify, seeker, recruiter):
    notify(seeker)
    notify(seeker)
    theirs = notify(recruiter)

    response = client_for(seeker).put("/notifications", json={"markAll": True})

    assert response.json()["updated"] == 2
    db.expire_all()
    assert db.get(Notification, theirs.id).is_read is False


def test_mark_read_without_ids_is_a_no_op(client_for, notify, seeker):
    notify(seeker)

    response = client_for(seeker).put("/notifications", json={})

    assert response.json() == {"success": True, "updated": 0}


def test_delete_selected(db, client_for, notify, seeker, recruiter):
    keep = notify(seeker, "keep")
    drop = notify(seeker, "drop")
    theirs = notify(recruiter)

    response = client_for(seeker).request(
        "DELETE", "/notifications", json={"notificationIds": [str(drop.id), str(theirs.id)]}
    )

    assert response.json() == {"success": True, "deleted": 1}
    remaining = db.execute(select(Notification.id)).scalars().all()
    assert set(remaining) == {keep.id, theirs.id}


def test_delete_all_is_scoped_to_caller(db, client_for, notify, seeker, recruiter):
    notify(seeker)
    notify(seeker)
    theirs = notify(recruiter)

    response = client_for(seeker).request("DELETE", "/notifications", json={"deleteAll": True})

    assert response.json()["deleted"] == 2
    assert db.execute(select(Notification.id)).scalars().all() == [theirs.id]


def test_notifications_require_a_session(anonymous_client):
    assert anonymous_client.get("/notifications").status_code == 401
