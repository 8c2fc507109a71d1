import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
from openai import APITimeoutError

from jobswipe.models import Match, Role
from jobswipe.models.match import ordered_pair
from jobswipe.services.ai import STATIC_SUGGESTIONS, SuggestionClient, get_suggestion_client


def _client_returning(content=None, error=None):
    client = SuggestionClient(api_key="sk-test", model="test-model", timeout=1.0)
    client.client = MagicMock()
    create = client.client.chat.completions.create
    if error is not None:
        create.side_effect = error
    else:
        create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
        )
    return client


def test_unconfigured_client_uses_static_lines():
    client = SuggestionClient(api_key=None, model="test-model", timeout=1.0)

    assert client.configured is False
    assert client.opening_lines(Role.RECRUITER) == STATIC_SUGGESTIONS[Role.RECRUITER]


def test_model_suggestions_are_trimmed_and_capped():
    payload = {"suggestions": ["  Hi!  ", "", "Hello", "Hey there", "One too many"]}
    client = _client_returning(json.dumps(payload))

    lines = client.opening_lines(Role.JOBSEEKER, job_title="Backend Engineer", previous_messages=["hello"])

    assert lines == ["Hi!", "Hello", "Hey there"]
    prompt = client.client.chat.completions.create.call_args.kwargs["messages"][1]["content"]
    assert "Backend Engineer" in prompt
    assert "Previous messages: hello" in prompt


def test_timeout_yields_no_suggestions():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    client = _client_returning(error=APITimeoutError(request=request))

    assert client.opening_lines(Role.JOBSEEKER) == []


def test_malformed_reply_yields_no_suggestions():
    assert _client_returning("not json").opening_lines(Role.JOBSEEKER) == []
    assert _client_returning(json.dumps({"ideas": ["x"]})).opening_lines(Role.JOBSEEKER) == []


def _client_without_choices():
    client = _client_returning()
    client.client.chat.completions.create.return_value = SimpleNamespace(choices=[])
    return client


def test_reply_without_choices_yields_no_suggestions():
    assert _client_without_choices().opening_lines(Role.RECRUITER) == []


def test_conversation_survives_ai_failure(wired_app, client_for, db, seeker, recruiter, job):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    wired_app.dependency_overrides[get_suggestion_client] = lambda: _client_returning(
        error=APITimeoutError(request=request)
    )
    user_a_id, user_b_id = ordered_pair(seeker.id, recruiter.id)
    match = Match(user_a_id=user_a_id, user_b_id=user_b_id, job_id=job.id)
    db.add(match)
    db.commit()

    response = client_for(seeker).get(f"/matches/{match.id}/messages")

    assert response.status_code == 200
    assert response.json()["suggestions"] == []


def test_conversation_survives_empty_ai_reply(wired_app, client_for, db, seeker, recruiter, job):
    wired_app.dependency_overrides[get_suggestion_client] = _client_without_choices
    user_a_id, user_b_id = ordered_pair(seeker.id, recruiter.id)
    match = Match(user_a_id=user_a_id, user_b_id=user_b_id, job_id=job.id)
    db.add(match)
    db.commit()

    response = client_for(recruiter).get(f"/matches/{match.id}/messages")

    assert response.status_code == 200
    assert response.json()["suggestions"] == []
