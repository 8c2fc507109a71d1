from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from jobswipe.models import Company, Match, Notification, OutboxEvent, Plan, Role, Swipe
from jobswipe.models.match import ordered_pair
from jobswipe.services import matching


def _like_job(client, job, direction="interested"):
    return client.post("/swipes", json={"jobId": str(job.id), "direction": direction})


def _like_candidate(client, job, candidate, direction="interested"):
    return client.post(
        "/swipes/candidates",
        json={"jobId": str(job.id), "candidateId": str(candidate.id), "direction": direction},
    )


def _match_count(db):
    return db.execute(select(func.count(Match.id))).scalar_one()


def test_candidate_then_recruiter_creates_one_match(db, client_for, seeker, recruiter, job):
    first = _like_job(client_for(seeker), job)
    assert first.json()["matched"] is False

    second = _like_candidate(client_for(recruiter), job, seeker)

    assert second.status_code == 200
    assert second.json()["matched"] is True
    match_id = second.json()["matchId"]

    match = db.execute(select(Match)).scalar_one()
    assert str(match.id) == match_id
    assert (match.user_a_id, match.user_b_id) == ordered_pair(seeker.id, recruiter.id)
    assert match.job_id == job.id


def test_match_notifies_both_sides(db, client_for, seeker, recruiter, job):
    _like_job(client_for(seeker), job)
    _like_candidate(client_for(recruiter), job, seeker)

    db.expire_all()
    notes = {
        n.user_id: n
        for n in db.execute(select(Notification).where(Notification.type == "match")).scalars()
    }
    assert set(notes) == {seeker.id, recruiter.id}
    assert notes[seeker.id].title == "New Match!"
    assert notes[seeker.id].body == "You matched with Acme Robotics for Backend Engineer"
    assert notes[recruiter.id].body == "A candidate matched with your Backend Engineer position"
    assert notes[seeker.id].action_link.startswith("/matches?id=")


def test_recruiter_first_matches_when_candidate_swipes(db, client_for, seeker, recruiter, job):
    assert _like_candidate(client_for(recruiter), job, seeker).json()["matched"] is False

    response = _like_job(client_for(seeker), job, "super_interested")

    assert response.json()["matched"] is True
    assert _match_count(db) == 1


def test_repeated_signal_does_not_duplicate(db, client_for, seeker, recruiter, job):
    seeker_client = client_for(seeker)
    recruiter_client = client_for(recruiter)
    _like_job(seeker_client, job)
    created = _like_candidate(recruiter_client, job, seeker).json()

    again = _like_candidate(recruiter_client, job, seeker).json()
    replay = _like_job(seeker_client, job).json()

    assert again["matched"] is True and replay["matched"] is True
    assert again["matchId"] == created["matchId"] == replay["matchId"]
    assert _match_count(db) == 1
    match_events = db.execute(
        select(func.count(OutboxEvent.id)).where(OutboxEvent.kind == "match.created")
    ).scalar_one()
    assert match_events == 1


def test_pass_never_matches(db, client_for, seeker, recruiter, job):
    _like_candidate(client_for(recruiter), job, seeker)

    response = _like_job(client_for(seeker), job, "pass")

    assert response.json()["matched"] is False
    assert _match_count(db) == 0


def test_recruiter_pass_blocks_match(db, client_for, seeker, recruiter, job):
    _like_job(client_for(seeker), job)

    response = _like_candidate(client_for(recruiter), job, seeker, "pass")

    assert response.json()["matched"] is False
    assert _match_count(db) == 0


def test_interest_is_scoped_to_the_company(db, client_for, make_job, seeker, recruiter, job):
    other_opening = make_job(recruiter, title="Data Engineer")
    _like_candidate(client_for(recruiter), job, seeker)

    response = _like_job(client_for(seeker), other_opening)

    assert response.json()["matched"] is True
    match = db.execute(select(Match)).scalar_one()
    assert match.job_id == other_opening.id


def _colleague_of(db, make_user, recruiter):
    company = db.get(Company, recruiter.company_id)
    return make_user(role=Role.RECRUITER, plan=Plan.BUSINESS, swipes=999, company=company, name="Cole League")


def test_colleague_interest_then_candidate_swipe_matches(db, client_for, make_user, seeker, recruiter, job):
    colleague = _colleague_of(db, make_user, recruiter)
    assert _like_candidate(client_for(colleague), job, seeker).json()["matched"] is False

    response = _like_job(client_for(seeker), job)

    assert response.json()["matched"] is True
    match = db.execute(select(Match)).scalar_one()
    assert (match.user_a_id, match.user_b_id) == ordered_pair(seeker.id, colleague.id)
    assert match.job_id == job.id


def test_candidate_swipe_then_colleague_interest_matches(db, client_for, make_user, seeker, recruiter, job):
    colleague = _colleague_of(db, make_user, recruiter)
    assert _like_job(client_for(seeker), job).json()["matched"] is False

    response = _like_candidate(client_for(colleague), job, seeker)

    assert response.json()["matched"] is True
    match = db.execute(select(Match)).scalar_one()
    assert (match.user_a_id, match.user_b_id) == ordered_pair(seeker.id, colleague.id)


def test_poster_is_preferred_among_interested_recruiters(db, make_user, seeker, recruiter, job):
    colleague = _colleague_of(db, make_user, recruiter)
    db.add_all([
        Swipe(sender_id=colleague.id, receiver_id=seeker.id, job_id=job.id, direction="interested",
              created_at=datetime(2024, 1, 1, tzinfo=timezone.utc)),
        Swipe(sender_id=recruiter.id, receiver_id=seeker.id, job_id=job.id, direction="super_interested",
              created_at=datetime(2024, 1, 2, tzinfo=timezone.utc)),
    ])
    db.commit()

    assert matching.interested_recruiter(db, seeker.id, job.company_id) == colleague.id
    assert matching.interested_recruiter(db, seeker.id, job.company_id, prefer=recruiter.id) == recruiter.id


def test_other_company_interest_does_not_count(db, client_for, make_company, make_user, make_job, seeker, recruiter, job):
    rival = make_user(role=recruiter.role_enum, company=make_company("Rival Inc"))
    rival_job = make_job(rival, title="Platform Engineer")
    _like_job(client_for(seeker), rival_job)

    response = _like_candidate(client_for(recruiter), job, seeker)

    assert response.json()["matched"] is False


def test_detection_failure_still_records_the_swipe(db, client_for, seeker, recruiter, job, monkeypatch):
    _like_candidate(client_for(recruiter), job, seeker)

    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(matching, "interested_recruiter", broken)
    response = _like_job(client_for(seeker), job)

    assert response.status_code == 200
    assert response.json()["matched"] is False
    assert db.execute(select(func.count(Swipe.id)).where(Swipe.sender_id == seeker.id)).scalar_one() == 1
    assert _match_count(db) == 0


@pytest.mark.parametrize("flip", [False, True])
def test_upsert_match_ignores_participant_order(db, seeker, recruiter, job, flip):
    first, second = (recruiter.id, seeker.id) if flip else (seeker.id, recruiter.id)

    match, created = matching.upsert_match(db, first, second, job.id)
    again, created_again = matching.upsert_match(db, second, first, job.id)
    db.commit()

    assert created is True
    assert created_again is False
    assert again.id == match.id
