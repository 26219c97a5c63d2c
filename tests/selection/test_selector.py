import pytest

from techtrendy.core import InsufficientTopics, Role, Topic
from techtrendy.selection import TopicSelector
from techtrendy.sources import REPRESENTATIVE_TOPICS


def _topic(title: str, score: float) -> Topic:
    return Topic(title=title, description="", source="test", url=f"https://example.com/{title}", relevance_score=score)


def test_default_partition_assigns_ranked_topics():
    selector = TopicSelector()

    assignments = selector.select(list(REPRESENTATIVE_TOPICS))

    by_role = {assignment.role: [topic.relevance_score for topic in assignment.topics] for assignment in assignments}
    assert [assignment.role for assignment in assignments] == [Role.PETR, Role.LUBO, Role.JARDA]
    # ranked: 0.95, 0.92, 0.88, 0.85, 0.78
    assert by_role[Role.PETR] == [0.95, 0.78]
    assert by_role[Role.LUBO] == [0.92, 0.88]
    assert by_role[Role.JARDA] == [0.85]


def test_select_is_deterministic_and_uses_input_topics():
    topics = [_topic(f"t{i}", score) for i, score in enumerate([0.3, 0.9, 0.5, 0.7, 0.1, 0.6])]
    selector = TopicSelector()

    first = selector.select(topics)
    second = selector.select(list(topics))

    assert first == second
    for assignment in first:
        for topic in assignment.topics:
            assert topic in topics


def test_equal_scores_keep_fetch_order():
    topics = [_topic("a", 0.5), _topic("b", 0.9), _topic("c", 0.5), _topic("d", 0.5), _topic("e", 0.5)]

    ranked = TopicSelector().rank(topics)

    assert [topic.title for topic in ranked] == ["b", "a", "c", "d", "e"]


def test_too_few_topics_raise():
    selector = TopicSelector()

    with pytest.raises(InsufficientTopics) as excinfo:
        selector.select([_topic("a", 0.5)] * 4)

    assert excinfo.value.required == 5
    assert excinfo.value.available == 4


def test_custom_partition_changes_required_count():
    selector = TopicSelector({Role.PETR: (0,), Role.LUBO: (1,)})

    assignments = selector.select([_topic("a", 0.2), _topic("b", 0.8)])

    assert selector.required_topics == 2
    assert [assignment.topics[0].title for assignment in assignments] == ["b", "a"]


def test_narrator_cannot_receive_topics():
    with pytest.raises(ValueError):
        TopicSelector({Role.NARRATOR: (0,)})


def test_topic_rejects_out_of_range_score():
    with pytest.raises(ValueError):
        _topic("broken", 1.5)
