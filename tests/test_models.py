import pytest
from pydantic import ValidationError

from contextrelay.models import (
    GetSlackMessagesRequest,
    SaveToGithubRequest,
    SlackMessage,
    SlackToGithubContextRequest,
)


def test_slack_message_author_falls_back_to_username_then_unknown():
    assert SlackMessage(user="U1", username="bot").author == "U1"
    assert SlackMessage(username="deploy-bot").author == "deploy-bot"
    assert SlackMessage().author == "Unknown"


def test_slack_message_keeps_provider_fields():
    msg = SlackMessage.model_validate({"ts": "1.5", "text": "x", "thread_ts": "1.0"})
    assert msg.model_dump(exclude_unset=True) == {"ts": "1.5", "text": "x", "thread_ts": "1.0"}


def test_request_defaults():
    assert GetSlackMessagesRequest().limit == 100
    assert SlackToGithubContextRequest().message_limit == 100


def test_limit_must_be_positive():
    with pytest.raises(ValidationError):
        GetSlackMessagesRequest(channel="C1", limit=0)


@pytest.mark.parametrize(
    "model", [GetSlackMessagesRequest, SaveToGithubRequest, SlackToGithubContextRequest]
)
def test_request_models_are_documented(model):
    assert model.__doc__ and model.__doc__.strip()


def test_older_than_accepts_numeric_timestamp():
    assert GetSlackMessagesRequest(channel="C1", older_than=1700000000.5).older_than == "1700000000.5"
