"""Custom exception hierarchy for cmdguess."""


class CmdGuessError(Exception):
    """Base exception for all cmdguess errors."""


class ConfigError(CmdGuessError):
    """Raised when config loading or validation fails."""


class RefFormatError(CmdGuessError):
    """Raised when a ref listing line cannot be parsed."""

    def __init__(self, line: str, lineno: int = 0) -> None:
        self.line = line
        self.lineno = lineno
        where = f" (line {lineno})" if lineno else ""
        super().__init__(f"Malformed ref line{where}: {line!r}")
