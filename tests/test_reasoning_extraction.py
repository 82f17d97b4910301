from curiosity.agents.reasoning import ThinkStreamFilter, split_thinking


def test_plain_text_untouched():
    assert split_thinking("Just an answer") == ("Just an answer", None)


def test_think_block_removed():
    answer, thinking = split_thinking("<think>\nstep one\n</think>\n\nThe answer")

    assert answer == "The answer"
    assert thinking == "step one"


def test_multiple_blocks_joined():
    answer, thinking = split_thinking("<think>a</think>Hi <THINK>b</THINK>there")

    assert answer == "Hi there"
    assert thinking == "a\n\nb"


def test_unclosed_block_swallows_rest():
    answer, thinking = split_thinking("Partial <think>still reasoning")

    assert answer == "Partial"
    assert thinking == "still reasoning"


def test_empty_block():
    assert split_thinking("<think></think>Done") == ("Done", None)


def test_empty_text():
    assert split_thinking("") == ("", None)


def _feed_all(chunks):
    stream = ThinkStreamFilter()
    shown = "".join(stream.feed(chunk) for chunk in chunks) + stream.flush()
    return shown, stream.thinking


def test_stream_filter_passes_plain_chunks():
    assert _feed_all(["Hello ", "world"]) == ("Hello world", None)


def test_stream_filter_handles_tags_split_across_chunks():
    shown, thinking = _feed_all(["<th", "ink>step", " one</TH", "INK>Answer"])

    assert shown == "Answer"
    assert thinking == "step one"


def test_stream_filter_releases_lone_angle_bracket():
    assert _feed_all(["a <", "b"]) == ("a <b", None)


def test_stream_filter_unclosed_block_swallows_rest():
    shown, thinking = _feed_all(["Partial ", "<think>still", " going"])

    assert shown == "Partial "
    assert thinking == "still going"
