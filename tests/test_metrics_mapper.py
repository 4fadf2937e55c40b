from FontNameCore.core_metrics_mapper import (
    FS_BOLD,
    FS_ITALIC,
    StyleMetrics,
    apply_metrics,
    find_rule,
)
from FontNameCore.core_style_word_dictionary import StyleWordDictionary


def make_rules(*entries):
    return StyleWordDictionary.from_mapping({"styleWords": list(entries)}).style_words


def test_tokens_are_rewritten_to_canonical_text():
    rules = make_rules({"text": "Bold", "weight": 700}, "Italic")
    metrics = StyleMetrics()
    assert apply_metrics(["BOLD", "italic"], rules, metrics) == ["Bold", "Italic"]
    assert metrics.weight == 700


def test_unknown_tokens_pass_through():
    rules = make_rules({"text": "Bold", "weight": 700})
    metrics = StyleMetrics()
    assert apply_metrics(["Swash"], rules, metrics) == ["Swash"]
    assert metrics.is_empty


def test_selection_flags_accumulate_with_or():
    rules = make_rules({"text": "A", "fsSelection": 1}, {"text": "B", "fsSelection": 2})
    metrics = StyleMetrics()
    apply_metrics(["A", "B"], rules, metrics)
    assert metrics.selection_flags == 3


def test_later_weight_and_width_overwrite():
    rules = make_rules(
        {"text": "Light", "weight": 300},
        {"text": "Black", "weight": 900},
        {"text": "Narrow", "width": 3},
        {"text": "Wide", "width": 7},
    )
    metrics = StyleMetrics()
    apply_metrics(["Light", "Narrow", "Black", "Wide"], rules, metrics)
    assert (metrics.weight, metrics.width) == (900, 7)


def test_match_rule_rewrites_to_replacement():
    rules = make_rules({"match": "Ital|Ita", "replace": "Italic", "fsSelection": 1})
    metrics = StyleMetrics()
    assert apply_metrics(["Ita"], rules, metrics) == ["Italic"]
    assert metrics.selection_flags == FS_ITALIC


def test_first_rule_in_order_wins():
    rules = make_rules({"text": "Heavy", "weight": 800}, {"text": "Heavy", "weight": 900})
    assert find_rule("heavy", rules).weight == 800
    assert find_rule("Thin", rules) is None


class Recorder:
    def __init__(self):
        self.calls = []

    def set_weight(self, value):
        self.calls.append(("weight", value))

    def set_width(self, value):
        self.calls.append(("width", value))

    def add_selection_flags(self, value):
        self.calls.append(("flags", value))


def test_apply_to_replays_onto_target():
    metrics = StyleMetrics(weight=700, selection_flags=FS_BOLD | FS_ITALIC)
    target = Recorder()
    metrics.apply_to(target)
    assert target.calls == [("weight", 700), ("flags", FS_BOLD | FS_ITALIC)]


def test_apply_metrics_writes_through_any_target():
    rules = make_rules({"text": "Bold", "weight": 700}, {"text": "Condensed", "width": 3})
    target = Recorder()
    apply_metrics(["Condensed", "Bold"], rules, target)
    assert target.calls == [("width", 3), ("weight", 700)]


def test_metrics_come_from_a_later_rule_for_the_same_word():
    rules = make_rules(
        {"text": "Bold", "separate": True},
        {"text": "Bold", "weight": 700},
        "Italic",
        {"text": "Italic", "fsSelection": 1},
    )
    metrics = StyleMetrics()
    assert apply_metrics(["bold", "italic"], rules, metrics) == ["Bold", "Italic"]
    assert metrics.weight == 700
    assert metrics.selection_flags == FS_ITALIC


def test_positional_filters_pick_the_metric_rule():
    rules = make_rules(
        {"text": "Bold", "weight": 700, "onlyLast": 1},
        {"text": "Bold", "weight": 600},
    )
    early = StyleMetrics()
    apply_metrics(["Bold", "Italic"], rules, early, positions=[1, 2], token_count=3)
    assert early.weight == 600

    last = StyleMetrics()
    apply_metrics(["Bold"], rules, last, positions=[2], token_count=3)
    assert last.weight == 700
