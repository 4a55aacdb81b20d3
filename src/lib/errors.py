"""
Fatal error conditions

Every error here ends the run: the command line prints the message to
stderr and exits with status 2. I/O errors raised while reading input or
writing output are not wrapped and propagate as OSError.
"""


class OutlineGrepError(Exception):
    """Base class for fatal outlinegrep errors"""
    pass


class OptionsEncodingError(OutlineGrepError):
    """Raised when the default options variable is not valid UTF-8"""

    def __init__(self) -> None:
        super().__init__(
            "OUTLINEGREP_OPTIONS environment variable contains invalid UTF-8"
        )


class StdinPrefilterError(OutlineGrepError):
    """Raised when standard input is combined with the git grep pre-filter"""

    def __init__(self) -> None:
        super().__init__("git grep pre-filter can't be used with standard input")


class PrefilterError(OutlineGrepError):
    """Raised when git grep exits with a status other than 0 or 1"""

    def __init__(self, returncode: int) -> None:
        self.returncode = returncode
        super().__init__(f"git grep failed (exit status {returncode})")


class PatternError(OutlineGrepError):
    """Raised when the search pattern does not compile"""
    pass


class OutputOrderError(OutlineGrepError):
    """Raised when the printer would break ascending line order"""
    pass
