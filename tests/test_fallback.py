import pytest

from curiosity.agents.fallback import build_fallback_message, detect_topic


@pytest.mark.parametrize(
    "text, topic",
    [
        ("Show me my latest leads", "leads"),
        ("Which contacts did I add?", "contacts"),
        ("How is my pipeline looking", "opportunities"),
        ("Check my inbox", "email"),
        ("What meetings do I have tomorrow?", "calendar"),
        ("Create a follow-up task", "tasks"),
    ],
)
def test_topics(text, topic):
    assert detect_topic(text).name == topic


def test_earliest_keyword_wins():
    assert detect_topic("email the lead list").name == "email"
    assert detect_topic("lead emails").name == "leads"


def test_keywords_match_word_starts_only():
    assert detect_topic("the misleading numbers") is None


@pytest.mark.parametrize("text", [None, "", "tell me a joke"])
def test_no_topic(text):
    assert detect_topic(text) is None


def test_topic_message():
    message = build_fallback_message("list my leads", 10)

    assert message == (
        "I wasn't able to finish looking up your leads after 10 steps. "
        "Please try again with a more specific request, and check that your "
        "CRM connection (Salesforce or Monday.com) is active in Settings."
    )


def test_generic_message():
    message = build_fallback_message(None, 3)

    assert message.startswith("I wasn't able to finish that request after 3 steps.")
