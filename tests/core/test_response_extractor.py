from __future__ import annotations

import time

import pytest

from hreval.core import ResponseExtractor


@pytest.fixture
def extractor() -> ResponseExtractor:
    return ResponseExtractor()


def test_json_fence_wins_over_stray_braces(extractor: ResponseExtractor):
    text = (
        "Scoring used {weights} from the rubric.\n"
        "```json\n"
        '{"score": 80, "hiringDecision": "Hire"}\n'
        "```\n"
        'Ignore this: {"score": 5}'
    )

    candidate = extractor.extract(text)
    parsed = extractor.parse(text)

    assert candidate is not None
    assert candidate.strategy == "json_fence"
    assert parsed is not None
    assert parsed.payload == {"score": 80, "hiringDecision": "Hire"}


def test_plain_fence_used_when_no_json_label(extractor: ResponseExtractor):
    text = 'Result:\n```\n{"suspicionScore": 12}\n```'

    parsed = extractor.parse(text)

    assert parsed is not None
    assert parsed.strategy == "fence"
    assert parsed.payload == {"suspicionScore": 12}


def test_fence_language_tag_is_skipped(extractor: ResponseExtractor):
    text = '```javascript\n{"score": 3}\n```'

    candidate = extractor.extract(text)

    assert candidate is not None
    assert candidate.text == '{"score": 3}'


def test_braces_span_first_to_last(extractor: ResponseExtractor):
    text = 'Here you go: {"a": {"b": 2}} hope that helps'

    candidate = extractor.extract(text)
    parsed = extractor.parse(text)

    assert candidate is not None
    assert candidate.strategy == "braces"
    assert candidate.text == '{"a": {"b": 2}}'
    assert parsed is not None
    assert parsed.payload == {"a": {"b": 2}}


@pytest.mark.parametrize("text", ["", "No structured output today.", "} backwards {", None, 42])
def test_no_candidate_returns_none(extractor: ResponseExtractor, text):
    assert extractor.extract(text) is None
    assert extractor.parse(text) is None


def test_malformed_fenced_json_is_a_parse_failure(extractor: ResponseExtractor):
    text = '```json\n{"score": 80,\n```'

    assert extractor.extract(text) is not None
    assert extractor.parse(text) is None


def test_whole_response_is_tried_when_no_candidate(extractor: ResponseExtractor):
    parsed = extractor.parse('  "just a string"  ')

    assert parsed is not None
    assert parsed.strategy == "raw"
    assert parsed.payload == "just a string"


def test_decoded_null_is_still_parsed(extractor: ResponseExtractor):
    parsed = extractor.parse("null")

    assert parsed is not None
    assert parsed.payload is None


def test_deeply_nested_input_does_not_raise(extractor: ResponseExtractor):
    assert extractor.parse("[" * 200_000) is None


def test_large_non_json_response(extractor: ResponseExtractor):
    text = "x" * 10_000_000

    assert extractor.parse(text) is None


def test_unclosed_fence_with_whitespace_run_is_linear(extractor: ResponseExtractor):
    text = "```json\n{" + " " * 1_000_000

    started = time.perf_counter()
    parsed = extractor.parse(text)
    elapsed = time.perf_counter() - started

    assert parsed is None
    assert elapsed < 1.0


def test_unclosed_fence_with_long_tag_is_linear(extractor: ResponseExtractor):
    text = "```" + "a" * 1_000_000

    started = time.perf_counter()
    assert extractor.extract(text) is None
    assert time.perf_counter() - started < 1.0


def test_unclosed_fence_falls_back_to_braces(extractor: ResponseExtractor):
    text = 'Truncated:\n```json\n{"score": 61}\n'

    candidate = extractor.extract(text)

    assert candidate is not None
    assert candidate.strategy == "braces"
    assert extractor.parse(text).payload == {"score": 61}


def test_uppercase_json_label_and_padding(extractor: ResponseExtractor):
    text = '```JSON   \n\n  {"score": 7}  \n\n```'

    candidate = extractor.extract(text)

    assert candidate is not None
    assert candidate.strategy == "json_fence"
    assert candidate.text == '{"score": 7}'
