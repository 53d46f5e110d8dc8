"""
Teacher identity resolution.

Generated timetables carry free-text teacher labels ("Mrs. Sharma",
"Mrs. Sharma (ID: t1)", "Mrs. Sharma / Mr. Patil", ...). The resolver maps
such a label onto a teacher of the directory by trying a list of match
strategies in order.
"""
from enum import Enum
from typing import Callable, Dict, Optional, Sequence
from models.schemas import Teacher
from config import settings
import logging

logger = logging.getLogger(__name__)


class MatchStrategy(str, Enum):
    EXACT_NAME = "exact_name"
    EXACT_NAME_WITH_ID = "exact_name_with_id"
    SUBSTRING_CONTAINS = "substring_contains"


def _exact_name(label: str, teacher: Teacher) -> bool:
    return label == teacher.name


def _exact_name_with_id(label: str, teacher: Teacher) -> bool:
    return label == f"{teacher.name} (ID: {teacher.id})"


def _substring_contains(label: str, teacher: Teacher) -> bool:
    # Permissive: "Ms. Rao" also matches "Ms. Raos" or a subject containing the name
    return bool(teacher.name) and teacher.name in label


MATCHERS: Dict[MatchStrategy, Callable[[str, Teacher], bool]] = {
    MatchStrategy.EXACT_NAME: _exact_name,
    MatchStrategy.EXACT_NAME_WITH_ID: _exact_name_with_id,
    MatchStrategy.SUBSTRING_CONTAINS: _substring_contains,
}

DEFAULT_STRATEGIES = (
    MatchStrategy.EXACT_NAME,
    MatchStrategy.EXACT_NAME_WITH_ID,
    MatchStrategy.SUBSTRING_CONTAINS,
)


class TeacherResolver:
    """
    Ordered-strategy resolver.

    The first strategy that matches any teacher wins; within a strategy the
    first teacher in directory order wins. Pass a shorter strategy tuple
    (e.g. without SUBSTRING_CONTAINS) for stricter matching.
    """

    def __init__(self, strategies: Sequence[MatchStrategy] = DEFAULT_STRATEGIES):
        self.strategies = tuple(MatchStrategy(s) for s in strategies)

    def resolve(self, label: Optional[str], directory: Sequence[Teacher]) -> Optional[Teacher]:
        if label is None or label.strip() in ("", settings.no_teacher_label):
            return None

        for strategy in self.strategies:
            matcher = MATCHERS[strategy]
            for teacher in directory:
                if matcher(label, teacher):
                    return teacher

        logger.debug(f"No teacher in directory matches label '{label}'")
        return None


default_resolver = TeacherResolver()


def resolve(
    label: Optional[str],
    directory: Sequence[Teacher],
    strategies: Sequence[MatchStrategy] = DEFAULT_STRATEGIES,
) -> Optional[Teacher]:
    """Resolve a free-text teacher label against the directory."""
    if tuple(strategies) == DEFAULT_STRATEGIES:
        return default_resolver.resolve(label, directory)
    return TeacherResolver(strategies).resolve(label, directory)
