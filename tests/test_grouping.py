from correction_editor.grouping import affects_same_tokens, find_groups, overlapping_group, transforms_overlap
from correction_editor.ir import Token, Transformation


def _t(affected, added):
    return Transformation(
        tokens_affected=[Token(i, str(i)) for i in affected],
        tokens_added=[Token(i, str(i)) for i in added],
    )


def test_scenario_groups(scenario):
    sentence = scenario.rules_applied[0]
    t1, t2, t3 = sentence.transformations
    assert t1.group_id == t2.group_id
    assert t3.group_id != t1.group_id
    assert sentence.groups[t1.group_id] == [t1, t2]
    assert sentence.groups[t3.group_id] == [t3]
    assert overlapping_group(sentence, t2) == [t1, t2]


def test_overlap_directions():
    t1 = _t([1], [4])
    t2 = _t([4, 2], [5, 6])
    assert transforms_overlap(t1, t2, in_order=True)
    # reversed arguments only match when order is unknown
    assert not transforms_overlap(t2, t1, in_order=True)
    assert transforms_overlap(t2, t1)
    assert not transforms_overlap(t1, _t([3], [7]))


def test_find_groups_is_pure():
    ts = [_t([1], [4]), _t([3], [7])]
    groups = find_groups(ts)
    assert [len(g) for g in groups.values()] == [1, 1]
    assert all(t.group_id is None for t in ts)


def test_shared_tokens_group_across_earlier_members():
    # t0 and t1 are disjoint, t2 touches both: one component
    ts = [_t([1], [10]), _t([2], [11]), _t([1, 2], [12])]
    groups = find_groups(ts)
    assert len(groups) == 1
    assert groups[0] == ts


def test_groups_are_a_partition(two):
    for sentence in two.rules_applied:
        seen = [t for members in sentence.groups.values() for t in members]
        assert sorted(t.index_in_sentence for t in seen) == list(range(len(sentence.transformations)))


def test_alternatives_share_a_group(two):
    sentence = two.rules_applied[1]
    is_fix, great, note, was_fix = sentence.transformations
    assert is_fix.group_id == was_fix.group_id
    assert len({is_fix.group_id, great.group_id, note.group_id}) == 3
    assert affects_same_tokens(is_fix, was_fix)
    assert not affects_same_tokens(is_fix, great)
