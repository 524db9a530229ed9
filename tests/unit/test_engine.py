import pytest

from linkcase_core import DEFAULT_SETTINGS, CasingCommand, LinkCasingSettings
from linkcase_rewrite.engine import (
    FORM_ORDER,
    PatternForm,
    find_occurrences,
    render_occurrence,
    rewrite_text,
    rewrite_text_counted,
)

FIRST_WORD = LinkCasingSettings(lowercaseFirstWordOnly=True)


def test_inline_link_commands():
    assert rewrite_text("[[Link Name\\l]]") == "[[Link Name|link name]]"
    assert rewrite_text("[[Link Name\\u]]") == "[[Link Name|LINK NAME]]"
    assert rewrite_text("[[link name\\c]]") == "[[link name|Link name]]"
    assert rewrite_text("[[link name\\t]]") == "[[link name|Link Name]]"


def test_inline_link_lower_first_word_only():
    assert rewrite_text("[[Link Name\\l]]", FIRST_WORD) == "[[Link Name|link Name]]"


def test_omitted_settings_use_defaults():
    assert DEFAULT_SETTINGS.lowercase_first_word_only is False
    text = "[[Trip to Paris\\l]]"
    assert rewrite_text(text) == rewrite_text(text, DEFAULT_SETTINGS) == "[[Trip to Paris|trip to paris]]"


def test_link_forms_collapse_when_transform_is_a_noop():
    assert rewrite_text("[[LINK\\u]]") == "[[LINK]]"
    assert rewrite_text("[[Link Name\\t]]") == "[[Link Name]]"
    assert rewrite_text("[[note]]\\l") == "[[note]]"


def test_postfix_link():
    assert rewrite_text("[[Link Name]]\\l") == "[[Link Name|link name]]"
    assert rewrite_text("See [[Link Name]]\\u now") == "See [[Link Name|LINK NAME]] now"


def test_inline_alias():
    assert rewrite_text("[[link name|ALIAS\\l]]") == "[[link name|alias]]"
    assert rewrite_text("[[target|some alias\\t]]") == "[[target|Some Alias]]"


def test_postfix_alias():
    assert rewrite_text("[[link name|alias]]\\t") == "[[link name|Alias]]"
    assert rewrite_text("[[Target|My Alias]]\\l", FIRST_WORD) == "[[Target|my Alias]]"


def test_alias_forms_never_collapse():
    assert rewrite_text("[[note|alias\\l]]") == "[[note|alias]]"
    assert rewrite_text("[[note|alias]]\\l") == "[[note|alias]]"
    assert rewrite_text("[[note|note\\l]]") == "[[note|note]]"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "plain prose",
        "[[Plain Link]]",
        "[[Link|Alias]]",
        "a lone \\l command",
        "[[Note]] \\l",  # not adjacent
        "[[Note\\x]]",  # unknown command
        "[[Note\\L]]",  # command letters are lowercase only
        "[Note\\l]",
        "[[\\l]]",  # empty target
        "[[Note|\\u]]",  # empty alias
    ],
)
def test_unrecognised_markup_is_inert(text):
    assert rewrite_text(text) == text


def test_every_occurrence_is_rewritten():
    text = "See [[One\\u]] and [[Two\\u]], then [[Three]]\\c."
    assert rewrite_text(text) == "See [[One|ONE]] and [[Two|TWO]], then [[Three]]."


def test_forms_across_lines():
    assert rewrite_text("[[a\\u]]\n[[b]]\\u") == "[[a|A]]\n[[b|B]]"


def test_adjacent_forms_do_not_cross_consume():
    # postfix alias followed directly by an inline link
    assert rewrite_text("[[A|B]]\\l[[Cd\\u]]") == "[[A|b]][[Cd|CD]]"
    # a trailing command after an inline command is not part of the inline form;
    # one pass leaves it in place and the next edit event applies it
    assert rewrite_text("[[Foo\\l]]\\u") == "[[Foo|foo]]\\u"
    assert rewrite_text("[[Foo|foo]]\\u") == "[[Foo|FOO]]"


def test_postfix_is_consumed_before_inline():
    text = "[[Ab]]\\u[[Cd\\l]]"
    assert rewrite_text(text) == "[[Ab|AB]][[Cd|cd]]"


def test_counted_reports_replacements():
    text, n = rewrite_text_counted("[[A\\u]] [[b]]\\u [[c|d\\u]] [[e|f]]\\u [[g]]")
    assert text == "[[A]] [[b|B]] [[c|D]] [[e|F]] [[g]]"
    assert n == 4


@pytest.mark.parametrize(
    "text",
    [
        "[[Link Name\\l]]",
        "Intro [[Link Name]]\\u and [[x|Y\\l]]",
        "[[A|B]]\\l[[Cd\\u]]",
        "nothing here",
    ],
)
def test_rewrite_is_idempotent(text):
    once = rewrite_text(text)
    assert rewrite_text(once) == once


def test_find_occurrences_records_spans_and_groups():
    text = "x [[Note|Alias\\u]] y"
    (occ,) = find_occurrences(text, PatternForm.INLINE_ALIAS)
    assert (occ.start, occ.end) == (2, 18)
    assert text[occ.start : occ.end] == "[[Note|Alias\\u]]"
    assert occ.link_target == "Note"
    assert occ.alias_text == "Alias"
    assert occ.has_alias
    assert occ.command is CasingCommand.UPPER
    assert occ.contains(2) and occ.contains(18) and not occ.contains(19)


def test_find_occurrences_link_form_has_no_alias():
    (occ,) = find_occurrences("[[Note]]\\t", PatternForm.POSTFIX_LINK)
    assert occ.alias_text is None
    assert not occ.has_alias
    assert occ.command is CasingCommand.TITLE
    assert render_occurrence(occ) == "[[Note]]"


def test_character_class_exclusions():
    # inline link target may not contain a pipe
    assert find_occurrences("[[a|b\\l]]", PatternForm.INLINE_LINK) == []
    # inline alias may not contain a backslash before the command
    assert find_occurrences("[[a|b\\c\\l]]", PatternForm.INLINE_ALIAS) == []
    # postfix alias text may contain a backslash
    (occ,) = find_occurrences("[[a|b\\c]]\\u", PatternForm.POSTFIX_ALIAS)
    assert occ.alias_text == "b\\c"


def test_form_order():
    assert FORM_ORDER == (
        PatternForm.POSTFIX_ALIAS,
        PatternForm.POSTFIX_LINK,
        PatternForm.INLINE_ALIAS,
        PatternForm.INLINE_LINK,
    )
