"""Typed errors raised by the simulation engine."""


class SimulationError(ValueError):
    """Base class for every error the engine reports to its caller."""


class MissingDiceKind(SimulationError):
    """No die (face count) was chosen."""

    def __init__(self) -> None:
        super().__init__("Choose a dice type before simulating")


class MissingDiceCount(SimulationError):
    """The effective number of dice per batch is zero or negative."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Dice count must be positive after excluding frozen dice, got {count}")


class InvalidCondition(SimulationError):
    """A clause lacks a field its reduction requires."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Condition {index} is incomplete")


class InvalidConjunctionStructure(SimulationError):
    """The and/or chain does not fold to a single verdict."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class InvalidPinnedFace(SimulationError):
    """A frozen die is pinned to a face the die does not have."""

    def __init__(self, position: int, face: int, faces: int) -> None:
        self.position = position
        self.face = face
        super().__init__(f"Die {position} is pinned to {face}, outside 1..{faces}")
