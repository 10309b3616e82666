class MazeError(Exception):
    """Base class for everything the maze pipeline raises on purpose."""


class InvalidDimensions(MazeError, ValueError):
    MIN_SIZE = 3
    MAX_SIZE = 255  # header stores each dimension in one byte

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        super().__init__(
            f"Maze dimensions {width}x{height} are invalid; width and height "
            f"must each be between {self.MIN_SIZE} and {self.MAX_SIZE}"
        )

    @classmethod
    def check(cls, width: int, height: int):
        for value in (width, height):
            if not isinstance(value, int) or not (cls.MIN_SIZE <= value <= cls.MAX_SIZE):
                raise cls(width, height)


class WriteFailure(MazeError, OSError):
    def __init__(self, phase: str, detail: str = ""):
        # phase is "header" or "grid"
        self.phase = phase
        message = f"Write-to-file error while writing maze {phase}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class ReadFailure(MazeError, OSError):
    def __init__(self, phase: str, detail: str = ""):
        self.phase = phase
        message = f"Read-from-file error while reading maze {phase}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class MazeFormatError(MazeError, ValueError):
    pass
