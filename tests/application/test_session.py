from datetime import timedelta

import pytest

from typetest.application.session import TestStatus, TypingTestSession
from typetest.application.stats.typing_stats import TestStats
from typetest.application.words.word_source import WordSource
from typetest.domain.words.models import WordStatus

POOL = [f"word{i}" for i in range(30)]


@pytest.fixture
def session(clock):
    # Every line is exactly "ab ab ab" with an 8 character budget
    return TypingTestSession(
        WordSource.random(["ab"], seed=1),
        stats=TestStats(clock=clock),
        test_length=timedelta(seconds=10),
        line_width=8,
    )


def texts(line):
    return [word.text for word in line]


def type_word(session, text):
    session.input_changed(text)
    return session.submit_word()


def test_new_session_has_two_lines_and_is_not_started(session):
    assert session.status == TestStatus.NOT_STARTED
    assert texts(session.current_line) == ["ab", "ab", "ab"]
    assert texts(session.next_line) == ["ab", "ab", "ab"]
    assert session.previous_line == []
    assert session.remaining_seconds == 10


def test_first_input_starts_the_test(session):
    session.input_changed("a")

    assert session.status == TestStatus.IN_PROGRESS
    assert session.current_word.status == WordStatus.NOT_TYPED


def test_input_not_matching_prefix_marks_word_incorrect(session):
    session.input_changed("x")
    assert session.current_word.status == WordStatus.INCORRECT

    session.input_changed("a")
    assert session.current_word.status == WordStatus.NOT_TYPED


def test_submit_word_updates_stats_and_word_status(session):
    assert type_word(session, "ab") is True
    assert type_word(session, "ac") is False

    assert [w.status for w in session.current_line] == [
        WordStatus.CORRECT,
        WordStatus.INCORRECT,
        WordStatus.NOT_TYPED,
    ]
    assert session.current_pos == 2
    assert session.current_input == ""
    assert session.stats.correct_words == 1
    assert session.stats.incorrect_words == 1


def test_submit_word_without_input_is_ignored(session):
    assert session.submit_word() is None

    session.input_changed("")
    assert session.submit_word() is None
    assert session.stats.total_chars == 0


def test_finishing_a_line_shifts_lines_up(session):
    upcoming = session.next_line
    for _ in range(3):
        type_word(session, "ab")

    assert session.current_pos == 0
    assert session.current_line is upcoming
    assert [w.status for w in session.previous_line] == [WordStatus.CORRECT] * 3
    assert texts(session.next_line) == ["ab", "ab", "ab"]


def test_tick_checkpoints_once_per_second(session):
    session.tick(timedelta(seconds=0.5))  # not started yet, ignored
    assert session.elapsed == timedelta(0)

    session.input_changed("a")
    for seconds in (0.5, 1.2, 1.8, 2.1):
        session.tick(timedelta(seconds=seconds))

    elapsed = [c.elapsed for c in session.stats.get_checkpoints()]
    assert elapsed == [timedelta(seconds=1.2), timedelta(seconds=2.1)]
    assert session.remaining_seconds == 7


def test_tick_completes_test_when_time_is_up(session):
    type_word(session, "ab")
    session.tick(timedelta(seconds=10))

    assert session.status == TestStatus.COMPLETE
    assert session.remaining_seconds == 0

    session.input_changed("ab")
    assert session.submit_word() is None
    assert session.stats.correct_words == 1


def test_timeout_does_not_count_time_past_the_end(session):
    for _ in range(5):
        type_word(session, "ab")
    session.tick(timedelta(seconds=25))

    assert session.status == TestStatus.COMPLETE
    assert session.elapsed == timedelta(seconds=10)
    assert session.stats.get_latest_checkpoint().elapsed == timedelta(seconds=10)
    # 15 / 5 / 10 * 60 = 18
    assert session.summary().effective_wpm == 18


def test_summary_reports_attempt(session):
    type_word(session, "ab")
    type_word(session, "ab")
    session.tick(timedelta(seconds=3))

    summary = session.summary()

    assert summary.correct_chars == 6
    # 6 / 5 / 3 * 60 = 24
    assert summary.effective_wpm == 24


def test_redo_replays_the_same_words(clock):
    session = TypingTestSession(
        WordSource.random(POOL, seed=5), stats=TestStats(clock=clock), line_width=30
    )
    original = (texts(session.current_line), texts(session.next_line))
    type_word(session, "nope")
    session.tick(timedelta(seconds=1))

    session.redo()

    assert session.status == TestStatus.NOT_STARTED
    assert (texts(session.current_line), texts(session.next_line)) == original
    assert session.stats.total_chars == 0
    assert session.stats.get_checkpoints() == ()
    assert session.elapsed == timedelta(0)


def test_next_test_uses_a_fresh_seed(clock):
    source = WordSource.random(POOL, seed=5, seed_source=lambda: 6)
    session = TypingTestSession(source, stats=TestStats(clock=clock), line_width=30)

    session.next_test()

    expected = WordSource.random(POOL, seed=6)
    assert texts(session.current_line) == texts(expected.fill_line(30))
    assert texts(session.next_line) == texts(expected.fill_line(30))
    assert source.seed == 6


def test_passage_completes_when_words_run_out(clock):
    session = TypingTestSession(
        WordSource.passage("one two"), stats=TestStats(clock=clock), line_width=80
    )
    assert session.next_line == []

    type_word(session, "one")
    session.tick(timedelta(seconds=2))
    type_word(session, "tow")

    assert session.status == TestStatus.COMPLETE
    assert session.current_line == []
    summary = session.summary()
    assert summary.correct_words == 1
    assert summary.incorrect_words == 1
    assert summary.missed_words == [("two", 1)]
    assert session.stats.get_latest_checkpoint().elapsed == timedelta(seconds=2)

    # The caller's next tick stamps the final checkpoint with the current time
    session.tick(timedelta(seconds=3.5))
    final = session.stats.get_latest_checkpoint()
    assert final.elapsed == timedelta(seconds=3.5)
    assert final.correct_words + final.incorrect_words == 2
    assert len(session.stats.get_checkpoints()) == 2

    session.tick(timedelta(seconds=5))
    assert len(session.stats.get_checkpoints()) == 2
    assert session.summary().elapsed == timedelta(seconds=3.5)
