"""
Tests for parsing AGENTS.md policy documents.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from agents_lint.exceptions import RulesDocumentError
from agents_lint.rules import Example, RulesDocument, normalize_id, parse_document, parse_document_file
from agents_lint.rules.parser import extract_behaviors, extract_examples, extract_steps

FIXTURE = Path(__file__).parent.parent / 'fixtures' / 'agents_md' / 'AGENTS.md'


@pytest.fixture(scope='module')
def document() -> RulesDocument:
    return parse_document_file(FIXTURE)


# ==============================================================================
# Fixture Document
# ==============================================================================


def test_title_is_first_h1(document: RulesDocument) -> None:
    assert document.title == 'Agent Instructions'


def test_numbered_rules(document: RulesDocument) -> None:
    assert [rule.id for rule in document.rules] == [f'rule-{n}' for n in range(1, 7)]
    assert [rule.number for rule in document.rules] == [1, 2, 3, 4, 5, 6]

    rule = document.get_rule_by_number(1)
    assert rule is not None
    assert rule.title == 'Read Before Writing'
    assert rule.raw_title == 'Rule 1: Read Before Writing'
    assert rule.required == ['You MUST read a file before editing it.']
    assert rule.prohibited == []


def test_rule_examples(document: RulesDocument) -> None:
    bd_rule = document.get_rule_by_id('rule-2')
    assert bd_rule is not None
    assert bd_rule.prohibited == ['NEVER use TodoWrite for task tracking.']
    assert bd_rule.examples == [
        Example(language='bash', code='bd ready  # ✅ find unblocked work', is_correct=True),
    ]

    commit_rule = document.get_rule_by_id('rule-6')
    assert commit_rule is not None
    assert [(e.is_correct, e.is_incorrect) for e in commit_rule.examples] == [(True, False), (False, True)]

    report_rule = document.get_rule_by_id('rule-5')
    assert report_rule is not None
    assert report_rule.examples == [Example(language='', code='Context: 42% used')]


def test_plain_section_with_steps(document: RulesDocument) -> None:
    section = document.get_section('Landing the Plane')

    assert section is not None
    assert section.steps == ['Run the test suite', 'Push the feature branch', 'Open a pull request']
    assert document.get_rule_by_id('landing-the-plane') is None


def test_lookup_misses_return_none(document: RulesDocument) -> None:
    assert document.get_rule_by_id('rule-99') is None
    assert document.get_rule_by_number(99) is None
    assert document.get_section('Appendix') is None


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(RulesDocumentError) as exc_info:
        parse_document_file(tmp_path / 'AGENTS.md')

    assert exc_info.value.path.endswith('AGENTS.md')


# ==============================================================================
# Structure
# ==============================================================================


def test_behavior_section_becomes_unnumbered_rule() -> None:
    document = parse_document('## Security Basics\n\nNEVER commit secrets to the repository.\n')

    (rule,) = document.rules
    assert rule.id == 'security-basics'
    assert rule.number == 0
    assert rule.title == 'Security Basics'
    assert rule.prohibited == ['NEVER commit secrets to the repository.']
    assert document.sections == []


def test_heading_without_lines_is_skipped() -> None:
    document = parse_document('## Placeholder\n## Notes\nJust some notes.\n')

    assert [section.title for section in document.sections] == ['Notes']


def test_content_before_first_h2_is_dropped() -> None:
    document = parse_document('# Title\nYou MUST ignore this preamble line.\n## Notes\nPlain text.\n')

    assert document.title == 'Title'
    assert document.rules == []
    assert document.sections[0].content == 'Plain text.'


def test_accepts_line_sequence() -> None:
    document = parse_document(['## Rule 7: Parallel Work', 'ALWAYS use a git worktree per agent.'])

    assert document.get_rule_by_number(7) is not None


@pytest.mark.parametrize(
    ('title', 'expected'),
    [
        ('Landing the Plane', 'landing-the-plane'),
        ('Commit Message Format!', 'commit-message-format'),
        ('  Tabs & Spaces  ', 'tabs-spaces'),
        ('API v2 (beta)', 'api-v2-beta'),
    ],
)
def test_normalize_id(title: str, expected: str) -> None:
    assert normalize_id(title) == expected


# ==============================================================================
# Behaviors, Examples and Steps
# ==============================================================================


def test_behaviors_inside_fences_are_ignored() -> None:
    lines = [
        '```bash',
        'NEVER run this: rm -rf /',
        '```',
        'You MUST run the linter before pushing.',
        '```',
        'ALWAYS inside an unlabeled fence',
        '```',
        'NEVER skip code review on shared branches.',
    ]

    required, prohibited = extract_behaviors(lines)

    assert required == ['You MUST run the linter before pushing.']
    assert prohibited == ['NEVER skip code review on shared branches.']


def test_bold_markers_are_stripped() -> None:
    required, _ = extract_behaviors(['**Always** run the tests first'])

    assert required == ['Always run the tests first']


def test_bold_must_phrase_is_required() -> None:
    required, _ = extract_behaviors(['Changes **must be reviewed** by a maintainer'])

    assert required == ['Changes must be reviewed by a maintainer']


def test_short_behaviors_are_dropped() -> None:
    assert extract_behaviors(['**MUST**', 'NEVER.']) == ([], [])


def test_line_can_be_required_and_prohibited() -> None:
    required, prohibited = extract_behaviors(['You MUST rebase and NEVER merge main into a branch.'])

    assert required == prohibited == ['You MUST rebase and NEVER merge main into a branch.']


def test_unterminated_fence_is_not_an_example() -> None:
    assert extract_examples(['```python', 'print("open")']) == []


def test_steps_need_number_dot_space() -> None:
    assert extract_steps(['1. First', '2.Second', '10. Tenth', '- bullet']) == ['First', 'Tenth']
