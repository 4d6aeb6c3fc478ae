"""Puzzle dimensions and the algorithm selector."""

from enum import Enum

GRID_SIZE = 9
SUBGRID_SIZE = 3
EMPTY = 0


class Algorithm(str, Enum):
    """Search strategy, keyed by its single-letter code."""
    BFS = 'B'
    IDDFS = 'I'
    UCS = 'U'
    A_STAR = 'A'
    GBFS = 'G'

    @classmethod
    def from_code(cls, code: str) -> 'Algorithm':
        """Resolve a single-letter code (case-insensitive).

        Raises:
            ValueError: If the code does not name an algorithm
        """
        if isinstance(code, cls):
            return code
        try:
            return cls(str(code).strip().upper())
        except ValueError:
            valid = ", ".join(a.value for a in cls)
            raise ValueError(f"Unknown algorithm '{code}' (expected one of: {valid})")

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    Algorithm.BFS: "BFS",
    Algorithm.IDDFS: "IDDFS",
    Algorithm.UCS: "UCS",
    Algorithm.A_STAR: "A*",
    Algorithm.GBFS: "GREEDY",
}
