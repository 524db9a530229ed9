import pytest

from linkcase_rewrite.engine import (
    PatternForm,
    find_enclosing_occurrence,
    plan_rewrite,
    rewrite_text,
)

TEXT = "Hello [[Link Name\\l]] world"
START = TEXT.index("[[")
END = TEXT.index("]]") + 2


@pytest.mark.parametrize("caret", range(START, END + 1))
def test_caret_inside_occurrence_lands_after_closing_brackets(caret):
    plan = plan_rewrite(TEXT, caret)
    assert plan.changed
    assert plan.text == "Hello [[Link Name|link name]] world"
    assert plan.caret == len("Hello [[Link Name|link name]]")
    assert plan.text[: plan.caret].endswith("]]")


@pytest.mark.parametrize("caret", [0, START - 1, END + 1, len(TEXT)])
def test_caret_outside_occurrence_is_left_to_host(caret):
    plan = plan_rewrite(TEXT, caret)
    assert plan.changed
    assert plan.caret is None
    assert plan.occurrence is None


def test_caret_accounts_for_earlier_replacements():
    text = "[[A\\u]] then [[Bb\\l]]"
    plan = plan_rewrite(text, len(text))
    assert plan.text == "[[A]] then [[Bb|bb]]"
    # prefix shrank by two characters, the occurrence grew by one
    assert plan.caret == len(plan.text)


def test_caret_inside_postfix_form():
    text = "x [[Note]]\\u y"
    plan = plan_rewrite(text, text.index("\\u") + 2)
    assert plan.text == "x [[Note|NOTE]] y"
    assert plan.caret == len("x [[Note|NOTE]]")
    assert plan.occurrence.form is PatternForm.POSTFIX_LINK


def test_unchanged_text_never_moves_caret():
    plan = plan_rewrite("plain [[Note]] text", 8)
    assert not plan.changed
    assert plan.caret is None
    assert plan.text == "plain [[Note]] text"


def test_shared_boundary_prefers_earlier_form():
    # postfix link ends exactly where an inline link starts
    text = "[[Ab]]\\u[[Cd\\l]]"
    caret = len("[[Ab]]\\u")
    occ = find_enclosing_occurrence(text, caret)
    assert occ.form is PatternForm.POSTFIX_LINK
    plan = plan_rewrite(text, caret)
    assert plan.text == "[[Ab|AB]][[Cd|cd]]"
    assert plan.caret == len("[[Ab|AB]]")


def test_shared_boundary_prefers_earlier_form_even_when_it_is_to_the_right():
    text = "[[Ab\\u]][[Cd]]\\l"
    caret = len("[[Ab\\u]]")
    occ = find_enclosing_occurrence(text, caret)
    assert occ.form is PatternForm.POSTFIX_LINK
    assert occ.start == caret
    plan = plan_rewrite(text, caret)
    assert plan.text == "[[Ab|AB]][[Cd|cd]]"
    assert plan.caret == len(plan.text)


def test_shared_boundary_within_one_form_prefers_leftmost():
    text = "[[Ab\\u]][[Cd\\l]]"
    caret = len("[[Ab\\u]]")
    plan = plan_rewrite(text, caret)
    assert plan.occurrence.start == 0
    assert plan.caret == len("[[Ab|AB]]")


def test_plan_text_matches_global_rewrite():
    text = "[[one]]\\u, [[two|x\\t]], [[Three\\l]]"
    for caret in range(len(text) + 1):
        assert plan_rewrite(text, caret).text == rewrite_text(text)
