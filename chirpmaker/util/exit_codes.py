"""Exit codes of the chirpmaker command line.

- 0: success
- 1: unexpected runtime error
- 2: invalid arguments, including any rejected sweep parameter
- 3-5: application specific failures

Usage:
    from chirpmaker.util.exit_codes import ExitCode
    sys.exit(ExitCode.UNKNOWN_BIRD)
"""

from __future__ import annotations


class ExitCode:
    """Exit code constants.

    Attributes:
        SUCCESS: Normal termination.
        GENERAL_ERROR: Unspecified runtime error.
        INVALID_ARGS: Argument or precondition validation failed.
        UNKNOWN_BIRD: Requested bird profile id/name does not exist.
        DEVICE_UNAVAILABLE: Output hardware could not be opened.
        OUTPUT_ERROR: Rendered audio could not be written.
        INTERRUPTED: Stopped with Ctrl-C (endless concerts end this way).
    """

    SUCCESS: int = 0
    GENERAL_ERROR: int = 1
    INVALID_ARGS: int = 2
    UNKNOWN_BIRD: int = 3
    DEVICE_UNAVAILABLE: int = 4
    OUTPUT_ERROR: int = 5
    INTERRUPTED: int = 130

    @classmethod
    def message(cls, code: int) -> str:
        messages = {
            cls.SUCCESS: "Success",
            cls.GENERAL_ERROR: "General error",
            cls.INVALID_ARGS: "Invalid arguments",
            cls.UNKNOWN_BIRD: "Unknown bird",
            cls.DEVICE_UNAVAILABLE: "Output device unavailable",
            cls.OUTPUT_ERROR: "Output file error",
            cls.INTERRUPTED: "Interrupted",
        }
        return messages.get(code, f"Unknown exit code {code}")
