"""Unit tests for the Leadership Principle catalog and question bank."""

import pytest

from starcoach.contexts.catalog import (
    COMMON_QUESTIONS,
    LEADERSHIP_PRINCIPLES,
    LP_IDS,
    QUESTION_CATEGORIES,
    filter_questions,
    get_lp,
    get_question,
    is_valid_lp,
)


@pytest.mark.unit
def test_catalog_has_sixteen_unique_principles():
    assert len(LEADERSHIP_PRINCIPLES) == 16
    assert len(set(LP_IDS)) == 16
    assert len({lp.short for lp in LEADERSHIP_PRINCIPLES}) == 16


@pytest.mark.unit
def test_catalog_order():
    assert LP_IDS[0] == "customer-obsession"
    assert LP_IDS[-1] == "broad-responsibility"


@pytest.mark.unit
def test_get_lp():
    lp = get_lp("dive-deep")
    assert lp.name == "Dive Deep"
    assert lp.short == "DD"
    assert get_lp("missing") is None
    assert is_valid_lp("ownership")
    assert not is_valid_lp("Ownership")


@pytest.mark.unit
def test_questions_reference_catalog_lps():
    """Test that every question's LPs and category exist."""
    assert len(COMMON_QUESTIONS) == 25
    for question in COMMON_QUESTIONS:
        assert is_valid_lp(question.primary_lp), question.id
        assert all(is_valid_lp(lp_id) for lp_id in question.secondary_lps), question.id
        assert question.category in QUESTION_CATEGORIES


@pytest.mark.unit
def test_get_question():
    assert get_question("q14").primary_lp == "dive-deep"
    assert get_question("q99") is None


@pytest.mark.unit
def test_filter_questions_defaults_return_all():
    assert filter_questions() == list(COMMON_QUESTIONS)


@pytest.mark.unit
def test_filter_questions_by_category():
    questions = filter_questions(category="Conflict & Influence")
    assert [q.id for q in questions] == ["q4", "q7", "q16", "q18", "q22"]


@pytest.mark.unit
def test_filter_questions_by_lp_includes_secondary():
    """Test that the LP filter matches primary and secondary LPs."""
    ids = [q.id for q in filter_questions(lp_id="frugality")]
    assert ids == ["q8", "q10"]


@pytest.mark.unit
def test_filter_questions_combined():
    ids = [q.id for q in filter_questions(category="Decision Making", lp_id="are-right")]
    assert ids == ["q3", "q14"]


@pytest.mark.unit
def test_filter_unknown_category_is_empty():
    assert filter_questions(category="Nope") == []
