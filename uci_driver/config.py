"""
Engine configuration.
"""

from dataclasses import dataclass, field
from typing import Optional


DEFAULT_MOVETIME = 100
"""Default think time in milliseconds"""

DEFAULT_DEPTH = 10
"""Default fixed search depth in plies"""


@dataclass
class SearchBudget:
    """How long the engine may search before answering bestmove.

    Exactly one of movetime and depth is set. Leaving both unset selects
    the default think time.
    """

    movetime: Optional[int] = None
    """Think time per move in milliseconds"""

    depth: Optional[int] = None
    """Fixed search depth in plies"""

    def __post_init__(self):
        """Validate budget after initialization."""
        if self.movetime is None and self.depth is None:
            self.movetime = DEFAULT_MOVETIME

        if self.movetime is not None and self.depth is not None:
            raise ValueError(
                f"movetime and depth are mutually exclusive, got "
                f"movetime={self.movetime}, depth={self.depth}"
            )

        if self.movetime is not None and self.movetime <= 0:
            raise ValueError(f"movetime must be positive, got {self.movetime}")

        if self.depth is not None and self.depth <= 0:
            raise ValueError(f"depth must be positive, got {self.depth}")

    @classmethod
    def by_time(cls, movetime: int = DEFAULT_MOVETIME) -> "SearchBudget":
        """Budget limited by think time (milliseconds)."""
        return cls(movetime=movetime)

    @classmethod
    def by_depth(cls, depth: int = DEFAULT_DEPTH) -> "SearchBudget":
        """Budget limited by search depth (plies)."""
        return cls(depth=depth)

    @property
    def is_depth(self) -> bool:
        return self.depth is not None

    def __str__(self) -> str:
        if self.is_depth:
            return f"depth {self.depth}"
        return f"movetime {self.movetime}"


@dataclass
class EngineConfig:
    """Settings for one engine session."""

    budget: SearchBudget = field(default_factory=SearchBudget)
    """Search budget used by bestmove()"""

    read_timeout: Optional[float] = None
    """Seconds to wait for each output line (None blocks forever)"""

    expect_greeting: bool = True
    """Read one banner line after spawning, before sending uci"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not isinstance(self.budget, SearchBudget):
            raise TypeError(
                f"budget must be a SearchBudget, got {type(self.budget).__name__}"
            )

        if self.read_timeout is not None and self.read_timeout <= 0:
            raise ValueError(
                f"read_timeout must be positive, got {self.read_timeout}"
            )
