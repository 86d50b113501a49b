"""
Tests for the QuizSession orchestrator.

Covers the state machine, scoring, the feedback pause (driven by a
ManualScheduler), restart cancellation and the empty-set terminal state.
"""

import random
from collections import Counter

import pytest

from quote_quiz.core.models import QuoteRecord
from quote_quiz.loading import LiteralConfigProvider
from quote_quiz.session import (
    ImmediateScheduler,
    ManualScheduler,
    QuizSession,
    SessionConfig,
    SessionState,
)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def session(phrases_json, scheduler, rng) -> QuizSession:
    return QuizSession(
        LiteralConfigProvider(phrases_json),
        config=SessionConfig(feedback_delay_ms=2000),
        scheduler=scheduler,
        rng=rng,
    )


def answer_current(session: QuizSession, correct: bool) -> str:
    """Pick the right or a wrong option for the current question."""
    author = session.current_record.author
    options = session.current_options
    if correct:
        return author
    return next(o for o in options if o != author)


class TestSessionStart:

    def test_new_session_is_not_started(self, session):
        assert session.state is SessionState.NOT_STARTED
        assert session.current_record is None
        assert session.current_options == []
        assert session.total == 0

    def test_start_shuffles_loaded_records(self, session, sample_records):
        records = session.start()

        assert Counter(records) == Counter(sample_records)
        assert session.ordered_records == records
        assert session.state is SessionState.AWAITING_ANSWER
        assert session.current_position == 0
        assert session.score == 0
        assert session.total == 5

    def test_start_when_seeded_then_reproducible(self, phrases_json):
        first = QuizSession(LiteralConfigProvider(phrases_json), config=SessionConfig(seed=9)).start()
        second = QuizSession(LiteralConfigProvider(phrases_json), config=SessionConfig(seed=9)).start()

        assert first == second

    def test_start_when_empty_configuration_then_finished(self):
        session = QuizSession(LiteralConfigProvider(""))

        records = session.start()

        assert records == ()
        assert session.state is SessionState.FINISHED
        assert session.score == 0
        assert session.total == 0
        assert session.summary().percentage == 0

    def test_start_uses_injected_loader(self):
        calls = []

        def loader(provider):
            calls.append(provider)
            return (QuoteRecord("a", "A"),)

        provider = LiteralConfigProvider("ignored")
        session = QuizSession(provider, loader=loader)

        session.start()

        assert calls == [provider]
        assert session.total == 1

    def test_restart_reloads_records(self):
        batches = iter([
            (QuoteRecord("a", "A"), QuoteRecord("b", "B")),
            (QuoteRecord("c", "C"),),
        ])
        session = QuizSession(loader=lambda provider: next(batches))

        session.start()
        assert session.total == 2

        session.start()
        assert session.total == 1
        assert session.ordered_records == (QuoteRecord("c", "C"),)


class TestOptions:

    def test_current_options_contain_current_author_once(self, session):
        session.start()

        options = session.current_options

        assert options.count(session.current_record.author) == 1
        assert len(options) == 4

    def test_options_are_stable_for_a_position(self, session):
        session.start()

        assert session.current_options == session.current_options
        assert session.options_for(3) == session.options_for(3)

    def test_options_use_authors_of_full_set(self, session, sample_records):
        session.start()
        all_authors = {r.author for r in sample_records}

        for position in range(session.total):
            assert set(session.options_for(position)) <= all_authors

    def test_options_for_out_of_range_raises_index_error(self, session):
        session.start()

        with pytest.raises(IndexError, match="position out of range"):
            session.options_for(5)
        with pytest.raises(IndexError):
            session.options_for(-1)

    def test_returned_options_are_copies(self, session):
        session.start()

        session.current_options.clear()

        assert len(session.current_options) == 4

    def test_options_respect_config_count(self, phrases_json, rng):
        session = QuizSession(
            LiteralConfigProvider(phrases_json), config=SessionConfig(options_count=2), rng=rng,
        )
        session.start()

        assert len(session.current_options) == 2

    def test_dedupe_config_passes_through(self):
        records = (
            QuoteRecord("a", "X"),
            QuoteRecord("b", "Twain"),
            QuoteRecord("c", "Twain"),
            QuoteRecord("d", "Wilde"),
        )
        session = QuizSession(
            config=SessionConfig(dedupe_distractors=True),
            loader=lambda provider: records,
            rng=random.Random(0),
        )
        session.start()

        for position in range(session.total):
            options = session.options_for(position)
            assert len(options) == len(set(options))


class TestSubmitAnswer:

    def test_correct_answer_increments_score_by_one(self, session):
        session.start()

        result = session.submit_answer(answer_current(session, correct=True))

        assert result.accepted
        assert result.correct
        assert result.score == 1
        assert session.score == 1

    def test_wrong_answer_leaves_score_unchanged(self, session):
        session.start()
        author = session.current_record.author

        result = session.submit_answer(answer_current(session, correct=False))

        assert result.accepted
        assert not result.correct
        assert result.correct_author == author
        assert session.score == 0

    def test_comparison_is_exact(self, session):
        session.start()
        author = session.current_record.author

        result = session.submit_answer(author.upper() + " ")

        assert not result.correct

    def test_answer_shows_feedback_until_delay_elapses(self, session, scheduler):
        session.start()
        session.submit_answer(answer_current(session, correct=True))

        assert session.state is SessionState.SHOWING_FEEDBACK
        assert session.current_position == 0

        scheduler.advance(1999)
        assert session.current_position == 0

        scheduler.advance(1)
        assert session.state is SessionState.AWAITING_ANSWER
        assert session.current_position == 1

    def test_answer_during_feedback_is_ignored(self, session, scheduler):
        session.start()
        session.submit_answer(answer_current(session, correct=True))
        author = session.current_record.author

        result = session.submit_answer(author)

        assert not result.accepted
        assert session.score == 1
        assert len(scheduler.pending) == 1

    def test_answer_before_start_is_ignored(self, session):
        result = session.submit_answer("Gandhi")

        assert not result.accepted
        assert session.state is SessionState.NOT_STARTED

    def test_result_reports_next_position_and_finished(self, session, scheduler):
        session.start()

        results = []
        for _ in range(session.total):
            results.append(session.submit_answer(answer_current(session, correct=True)))
            scheduler.run_pending()

        assert [r.position for r in results] == [1, 2, 3, 4, 5]
        assert [r.finished for r in results] == [False] * 4 + [True]
        assert all(r.total == 5 for r in results)

    def test_last_answer_is_recorded(self, session):
        session.start()
        option = answer_current(session, correct=False)

        result = session.submit_answer(option)

        assert session.last_answer == result
        assert session.last_answer.selected == option


class TestSessionFinish:

    def test_full_session_finishes_with_score(self, session, scheduler):
        session.start()

        for i in range(session.total):
            session.submit_answer(answer_current(session, correct=i % 2 == 0))
            scheduler.run_pending()

        assert session.state is SessionState.FINISHED
        assert session.is_finished
        assert session.score == 3
        assert session.current_position == 5
        assert session.current_record is None
        assert session.current_options == []

        summary = session.summary()
        assert (summary.score, summary.total, summary.percentage) == (3, 5, 60)

    def test_submissions_after_finish_do_not_advance(self, session, scheduler):
        session.start()
        for _ in range(session.total):
            session.submit_answer(answer_current(session, correct=True))
            scheduler.run_pending()

        result = session.submit_answer("Gandhi")
        scheduler.run_pending()

        assert not result.accepted
        assert result.finished
        assert session.current_position == 5
        assert session.score == 5
        assert scheduler.pending == []

    def test_position_never_decreases(self, session, scheduler):
        session.start()
        positions = [session.current_position]

        while not session.is_finished:
            session.submit_answer(answer_current(session, correct=False))
            positions.append(session.current_position)
            scheduler.run_pending()
            positions.append(session.current_position)

        assert positions == sorted(positions)
        assert positions[-1] == session.total

    def test_immediate_scheduler_advances_synchronously(self, phrases_json, rng):
        session = QuizSession(
            LiteralConfigProvider(phrases_json), scheduler=ImmediateScheduler(), rng=rng,
        )
        session.start()

        session.submit_answer(answer_current(session, correct=True))

        assert session.state is SessionState.AWAITING_ANSWER
        assert session.current_position == 1


class TestRestartCancellation:

    def test_restart_cancels_pending_advance(self, session, scheduler):
        session.start()
        session.submit_answer(answer_current(session, correct=True))
        pending = scheduler.pending[0]

        session.start()

        assert not pending.active
        scheduler.run_pending()
        assert session.current_position == 0
        assert session.score == 0
        assert session.state is SessionState.AWAITING_ANSWER

    def test_stale_advance_is_ignored_even_if_not_cancelled(self, phrases_json, rng):
        """A scheduler that cannot cancel must still not leak into a new session."""

        class UncancellableScheduler:
            def __init__(self):
                self.callbacks = []

            def schedule(self, callback, delay_ms):
                self.callbacks.append(callback)
                return self

            active = True

            def cancel(self):
                pass

        scheduler = UncancellableScheduler()
        session = QuizSession(LiteralConfigProvider(phrases_json), scheduler=scheduler, rng=rng)
        session.start()
        session.submit_answer(answer_current(session, correct=True))

        session.start()
        scheduler.callbacks[0]()

        assert session.current_position == 0
        assert session.state is SessionState.AWAITING_ANSWER

    def test_restart_after_finish_resets_state(self, session, scheduler):
        session.start()
        for _ in range(session.total):
            session.submit_answer(answer_current(session, correct=True))
            scheduler.run_pending()

        session.start()

        assert session.state is SessionState.AWAITING_ANSWER
        assert session.score == 0
        assert session.current_position == 0
        assert session.last_answer is None


class TestListeners:

    def test_listener_sees_every_transition(self, session, scheduler):
        states = []
        session.add_listener(lambda s: states.append(s.state))

        session.start()
        session.submit_answer(answer_current(session, correct=True))
        scheduler.run_pending()

        assert states == [
            SessionState.AWAITING_ANSWER,
            SessionState.SHOWING_FEEDBACK,
            SessionState.AWAITING_ANSWER,
        ]

    def test_removed_listener_is_not_called(self, session):
        calls = []
        listener = lambda s: calls.append(s)  # noqa: E731
        session.add_listener(listener)
        session.remove_listener(listener)

        session.start()

        assert calls == []

    def test_ignored_answer_does_not_notify(self, session):
        calls = []
        session.add_listener(lambda s: calls.append(s.state))

        session.submit_answer("Gandhi")

        assert calls == []
