class LirsError(Exception):
    """ Base class for all LIRS errors"""
    kind = "LirsError"


class LirsLexError(LirsError):
    """ Raised on an unterminated string literal or an illegal character"""
    kind = "LexError"

    def __init__(self, message: str, offset: int | None = None):
        super().__init__(message)
        self.offset = offset


class LirsParseError(LirsError):
    """ Raised when the token stream does not form a valid expression"""
    kind = "ParseError"

    def __init__(self, message: str, offset: int | None = None):
        super().__init__(message)
        self.offset = offset


class LirsUnbalancedParens(LirsParseError):
    """ Raised on a missing or stray parenthesis"""
    kind = "ParseError::UnbalancedParens"


class LirsUnboundSymbol(LirsError):
    """ Raised when a symbol is used before it is bound"""
    kind = "UnboundSymbol"


class LirsUnknownOperator(LirsError):
    """ Raised when the head of a list names no special form, macro or primitive"""
    kind = "UnknownOperator"


class LirsArityError(LirsError):
    """ Raised when the number of arguments passed to a macro or primitive is incorrect"""
    kind = "ArityError"


class LirsOddArityError(LirsArityError):
    """ Raised when `material` receives an odd number of arguments"""
    kind = "OddArityError"


class LirsTypeError(LirsError):
    """ Raised when the types of arguments passed to a primitive are incorrect"""
    kind = "TypeError"


class LirsDivisionByZero(LirsError):
    """ Raised when a divisor is exactly zero"""
    kind = "DivisionByZero"


class LirsEmptyList(LirsError):
    """ Raised by car/cdr on an empty list"""
    kind = "EmptyList"


class LirsElementNotFound(LirsError):
    """ Raised when `substitute` is asked to replace an element absent from the formula"""
    kind = "ElementNotFound"


class LirsDepthExceeded(LirsError):
    """ Raised when macro expansion or evaluation nests deeper than allowed"""
    kind = "DepthExceeded"


class LirsOverflow(LirsError):
    """ Raised when an arithmetic result leaves the signed 64-bit integer range or becomes an infinite float"""
    kind = "Overflow"
