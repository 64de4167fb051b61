
class IkuError(Exception):
    """ Base class for all iku errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class IkuLexError(IkuError):
    """ Produced when the lexer meets characters it cannot scan"""

    def __init__(self, message: str, position: int = 0):
        super().__init__(message)
        self.position = position

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, IkuLexError)
            and self.message == other.message
            and self.position == other.position
        )

    def __hash__(self) -> int:
        return hash((self.message, self.position))


class IkuSyntaxError(IkuError):
    """ Raised when the token stream does not form a valid program"""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message if position is None else f"{message} at position {position}")
        self.position = position


class IkuInternalError(IkuError):
    """ Raised when the interpreter breaks one of its own invariants"""


class InterpreterError(IkuError):
    """ Base class for errors caused by running a bad program"""

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class IkuNameError(InterpreterError):
    """ Raised when a variable or function is used before it is defined"""


class IkuRedefinitionError(InterpreterError):
    """ Raised when a program defines the same function twice"""


class IkuArityError(InterpreterError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class IkuTypeError(InterpreterError):
    """ Raised when an operand or condition has the wrong type"""


class IkuZeroDivisionError(InterpreterError):
    """ Raised when an integer is divided by zero"""


class IkuOverflowError(InterpreterError):
    """ Raised when integer arithmetic leaves the signed 64-bit range"""


class IkuRecursionError(InterpreterError):
    """ Raised when calls nest deeper than the configured limit"""
