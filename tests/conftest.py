from __future__ import annotations
import copy

import pytest

from correction_editor.ir import DocumentResult
from correction_editor.metadata import set_metadata


def tok(id, value, after=" "):
    return {"id": id, "value": value, "after": after}


# "hzve be befor": t1 fixes the typo, t2 rewrites t1's output, t3 is independent
SCENARIO = {
    "id": "job-scenario",
    "grammarScore": 41.5,
    "rulesApplied": [
        {
            "originalSentence": [tok(1, "hzve"), tok(2, "be"), tok(3, "befor", "")],
            "transformations": [
                {"tokensAffected": [tok(1, "hzve")], "tokensAdded": [tok(4, "have")], "message": "Spelling"},
                {"tokensAffected": [tok(4, "have"), tok(2, "be")], "tokensAdded": [tok(5, "has"), tok(6, "been")]},
                {"tokensAffected": [tok(3, "befor", "")], "tokensAdded": [tok(7, "before", "")]},
            ],
        }
    ],
}

# two sentences; the second carries a suggestion, a comment-only note and two
# alternative rewrites of the same token
TWO_SENTENCES = {
    "id": "job-two",
    "grammarScore": 70,
    "rulesApplied": [
        {
            "originalSentence": [tok(1, "Ths"), tok(2, "is"), tok(3, "fine", ". ")],
            "transformations": [
                {"tokensAffected": [tok(1, "Ths")], "tokensAdded": [tok(10, "This")]},
            ],
        },
        {
            "originalSentence": [tok(1, "It"), tok(2, "are"), tok(3, "good", ".")],
            "transformations": [
                {"tokensAffected": [tok(2, "are")], "tokensAdded": [tok(20, "is")]},
                {"tokensAffected": [tok(3, "good", ".")], "tokensAdded": [tok(21, "great", ".")], "isSuggestion": True},
                {"tokensAffected": [tok(1, "It")], "tokensAdded": [], "hasReplacement": False, "message": "Vague subject"},
                {"tokensAffected": [tok(2, "are")], "tokensAdded": [tok(22, "was")]},
            ],
        },
    ],
}


@pytest.fixture
def scenario_raw():
    return copy.deepcopy(SCENARIO)


@pytest.fixture
def scenario(scenario_raw):
    return set_metadata(DocumentResult.from_dict(scenario_raw))


@pytest.fixture
def two_raw():
    return copy.deepcopy(TWO_SENTENCES)


@pytest.fixture
def two(two_raw):
    return set_metadata(DocumentResult.from_dict(two_raw))


class RecordingSink:
    def __init__(self, fail=False):
        self.records = []
        self.fail = fail

    def save_status(self, record):
        if self.fail:
            raise ConnectionError("status store unreachable")
        self.records.append(record)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def failing_sink():
    return RecordingSink(fail=True)
