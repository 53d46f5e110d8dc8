"""
Tests for teacher identity resolution.
"""
from models.schemas import Teacher
from service.teacher_resolver import resolve, TeacherResolver, MatchStrategy
from sample_data import get_teachers


def test_sentinels_resolve_to_none():
    teachers = get_teachers()
    assert resolve("N/A", teachers) is None
    assert resolve("", teachers) is None
    assert resolve("  ", teachers) is None
    assert resolve(None, teachers) is None


def test_exact_name():
    assert resolve("Mr. Patil", get_teachers()).id == "t2"


def test_name_with_id():
    assert resolve("Ms. D'Souza (ID: t3)", get_teachers()).id == "t3"


def test_name_with_id_beats_substring_of_other_teacher():
    """'Sharma' belongs to another teacher earlier in the directory; the ID form still wins."""
    teachers = [
        Teacher(id="t9", name="Sharma"),
        Teacher(id="t1", name="Mrs. Sharma"),
    ]
    assert resolve("Mrs. Sharma (ID: t1)", teachers).id == "t1"


def test_substring_contains():
    assert resolve("Mr. Khan / Mr. Patil", get_teachers()).id == "t2"


def test_substring_first_in_directory_wins():
    teachers = [Teacher(id="a", name="Rao"), Teacher(id="b", name="Ms. Rao")]
    assert resolve("Ms. Rao (Art)", teachers).id == "a"


def test_unknown_label():
    assert resolve("Dr. Who", get_teachers()) is None


def test_empty_directory():
    assert resolve("Mrs. Sharma", []) is None


def test_strict_resolver_skips_substring():
    strict = TeacherResolver([MatchStrategy.EXACT_NAME, MatchStrategy.EXACT_NAME_WITH_ID])
    assert strict.resolve("Mr. Khan (Sports)", get_teachers()) is None
    assert strict.resolve("Mr. Khan", get_teachers()).id == "t4"
    assert resolve("Mr. Khan (Sports)", get_teachers(), strategies=strict.strategies) is None
