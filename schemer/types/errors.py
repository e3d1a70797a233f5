class SchemeError(Exception):
    """ Base class for all schemer errors"""
    pass

class SchemeInvalidSymbol(SchemeError):
    """ Raised when a non-symbol is used where a symbol is required"""
    pass

class SchemeUnboundSymbol(SchemeError):
    """ Raised when a symbol is used before it is bound"""
    pass

class SchemeNameError(SchemeError):
    """ Raised when a name cannot be (re)defined"""

class SchemeSyntaxError(SchemeError):
    """ Raised when source text or a macro use is malformed.

    Macro expansion failures carry the macro name and the offending form.
    """

    def __init__(self, message: str, macro=None, form=None):
        super().__init__(message)
        self.macro = macro
        self.form = form

class SchemeArityError(SchemeError):
    """ Raised when the number of arguments passed to a procedure is incorrect"""

class SchemeTypeError(SchemeError):
    """ Raised when the types of arguments passed to a procedure are incorrect"""
