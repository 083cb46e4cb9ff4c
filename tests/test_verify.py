from correction_editor.ir import DocumentResult, Token
from correction_editor.metadata import set_metadata
from correction_editor.verify import check_availability, check_replay, check_token_ids, verify_document


def test_clean_document_has_no_findings(two):
    assert verify_document(two) == []


def test_replay_mismatch_is_reported(scenario):
    sentence = scenario.rules_applied[0]
    sentence.active_tokens = [Token(99, "garbage")]
    findings = check_replay(sentence)
    assert [f.rule_id for f in findings] == ["inv.replay_mismatch"]
    assert findings[0].details["expected"] == "hzve be befor"


def test_stale_flag_is_reported(scenario):
    sentence = scenario.rules_applied[0]
    sentence.transformations[1].is_available = True
    findings = check_availability(sentence)
    assert [f.transform_index for f in findings] == [1]


def test_inserted_id_collision(scenario_raw):
    scenario_raw["rulesApplied"][0]["transformations"][2]["tokensAdded"][0]["id"] = 2
    doc = set_metadata(DocumentResult.from_dict(scenario_raw))
    findings = check_token_ids(doc.rules_applied[0])
    assert [f.rule_id for f in findings] == ["inv.inserted_id_collision"]
    assert findings[0].transform_index == 2
