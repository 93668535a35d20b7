from dataclasses import dataclass

MALFORMED_OPTION = "CCARGS-0101"
EMPTY_VALUE = "CCARGS-0102"
UNKNOWN_OPTION = "CCARGS-0103"
MISSING_ARGUMENT = "CCARGS-0104"
INVALID_RECORD = "CCARGS-0201"


@dataclass(frozen=True)
class Diagnostic:
    stage: str
    message: str
    code: str | None = None
    token: str | None = None

    def __str__(self) -> str:
        return f"ccargs: {self.stage}: {self.message}"

    def as_dict(self) -> dict[str, str | None]:
        return {
            "stage": self.stage,
            "code": self.code,
            "token": self.token,
            "message": self.message,
        }


class OptionError(ValueError):
    stage = "parse"
    default_code = MALFORMED_OPTION

    def __init__(self, message: str, *, token: str | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.token = token
        self.code = self.default_code if code is None else code

    @property
    def diagnostic(self) -> Diagnostic:
        return Diagnostic(self.stage, self.message, self.code, self.token)


class MalformedOptionError(OptionError):
    default_code = MALFORMED_OPTION


class EmptyValueError(OptionError):
    default_code = EMPTY_VALUE


class UnknownOptionError(OptionError):
    default_code = UNKNOWN_OPTION


class MissingArgumentError(OptionError):
    default_code = MISSING_ARGUMENT


class FormatError(OptionError):
    stage = "format"
    default_code = INVALID_RECORD
