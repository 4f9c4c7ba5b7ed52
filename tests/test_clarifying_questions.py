"""
Tests for the clarifying-questions checker (Rule 13).

The question and implementation phrase sets are pinned here: changing a
pattern is a policy change and should change these tests.
"""

from __future__ import annotations

import pytest
from builders import assistant, assistant_text, call, session, text, tool_use, user_prompt

from agents_lint.checkers import ClarifyingQuestionsChecker, Severity
from agents_lint.checkers.clarifying_questions import (
    IMPLEMENTATION_PATTERNS,
    QUESTION_PATTERNS,
    is_complex_task,
)

checker = ClarifyingQuestionsChecker()

AUTH_TASK = 'Add user authentication to this app.'


def test_implementing_without_question_is_reported() -> None:
    transcript = session(
        user_prompt(AUTH_TASK),
        assistant_text('Let me start implementing the authentication system.', uuid='evt-reply'),
    )

    violations = checker.check(transcript)

    assert len(violations) == 1
    (violation,) = violations
    assert violation.checker_id == 'clarifying-questions'
    assert violation.rule == 'Rule 13'
    assert violation.severity is Severity.WARNING
    assert violation.message == 'Started implementing complex task without asking clarifying questions'
    assert violation.event_uuid == 'evt-reply'
    assert violation.context == {'task': AUTH_TASK}


def test_question_in_same_message_satisfies_rule() -> None:
    transcript = session(
        user_prompt(AUTH_TASK),
        assistant_text('Should I use JWT or session cookies? Let me start implementing with JWT.'),
    )

    assert checker.check(transcript) == []


def test_question_before_implementation_passes() -> None:
    transcript = session(
        user_prompt('Refactor the billing module'),
        assistant_text('Before I start, which approach do you prefer for retries?'),
        user_prompt('Exponential retries'),
        assistant_text("I'll start with the retry wrapper."),
    )

    assert checker.check(transcript) == []


def test_ask_user_question_tool_counts_as_asking() -> None:
    transcript = session(
        user_prompt('Migrate the config loader to TOML'),
        assistant(tool_use('toolu_q', 'AskUserQuestion', {'questions': [{'question': 'Keep YAML support?'}]})),
        call('toolu_w', 'Write', {'file_path': '/work/config.py', 'content': ''}),
    )

    assert checker.check(transcript) == []


def test_edit_tool_counts_as_implementing() -> None:
    transcript = session(
        user_prompt('Optimize the image pipeline'),
        assistant(
            text('Done looking.'),
            tool_use('toolu_e', 'Edit', {'file_path': '/work/pipeline.py', 'old_string': 'a', 'new_string': 'b'}),
            uuid='evt-edit',
        ),
    )

    (violation,) = checker.check(transcript)

    assert violation.event_uuid == 'evt-edit'


def test_messages_before_the_task_are_ignored() -> None:
    transcript = session(
        assistant_text('Let me start by reading the repository layout.'),
        user_prompt('Integrate Stripe webhooks'),
        assistant_text('Which library would you like me to use for signature checks?'),
    )

    assert checker.check(transcript) == []


def test_simple_request_is_not_checked() -> None:
    transcript = session(
        user_prompt('Fix the typo in the footer'),
        assistant_text("I'll start by opening the footer template."),
    )

    assert checker.check(transcript) == []


def test_each_complex_task_is_checked_separately() -> None:
    transcript = session(
        user_prompt('Refactor the session store'),
        assistant_text('Do you want to keep the Redis backend?'),
        user_prompt('Yes. Also redesign the cache keys'),
        assistant_text('Implementing the new key scheme now.'),
    )

    (violation,) = checker.check(transcript)

    assert violation.context['task'] == 'Yes. Also redesign the cache keys'


def test_long_task_is_truncated_in_context() -> None:
    task = 'Refactor ' + 'the legacy reporting code ' * 10
    transcript = session(user_prompt(task), assistant_text('Let me begin.'))

    (violation,) = checker.check(transcript)

    assert len(violation.context['task']) == 100
    assert violation.context['task'].endswith('...')


# ==============================================================================
# Pinned Phrase Sets
# ==============================================================================


@pytest.mark.parametrize(
    'request_text',
    [
        'Add authentication',
        'implement the notification system',
        'refactor this',
        'optimize queries',
        'Improve the performance of search',
        'add a new endpoint for exports',
        'build a new billing module',
        'create a reporting service',
        'integrate Sentry',
        'migrate to Postgres',
        'redesign onboarding',
        'add dark mode to the application',
    ],
)
def test_complex_task_phrases(request_text: str) -> None:
    assert is_complex_task(request_text)


@pytest.mark.parametrize('request_text', ['Fix the typo', 'What does this function do?', 'run the tests'])
def test_simple_request_phrases(request_text: str) -> None:
    assert not is_complex_task(request_text)


@pytest.mark.parametrize(
    'reply',
    [
        'Before I begin, a couple of things.',
        'I have some questions first.',
        'Which method should handle retries',
        'Should we keep the old API?',
        'Would you prefer tabs?',
        'Do you need Windows support',
        'What should the timeout be?',
        'Could you clarify the scope',
        'A few clarifying questions:',
        'Option A: rewrite. Option B: patch.',
    ],
)
def test_question_phrases(reply: str) -> None:
    assert any(p.search(reply) for p in QUESTION_PATTERNS)


@pytest.mark.parametrize(
    'reply',
    [
        'Let me write the migration.',
        "I'll create the handler.",
        "I'm going to implement caching.",
        'I will now start the refactor.',
        'Creating the schema file.',
        'Implementing retries.',
        "I've added the endpoint.",
        'Starting the conversion.',
        "Now I'll write tests.",
    ],
)
def test_implementation_phrases(reply: str) -> None:
    assert any(p.search(reply) for p in IMPLEMENTATION_PATTERNS)


def test_starting_only_matches_at_message_start() -> None:
    assert not any(p.search('We are starting the review') for p in IMPLEMENTATION_PATTERNS)
