"""Error handling for the eldiro language. Only GenericExceptions should be encountered during running: if another type
of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Error kinds:
- Malformed: syntactic mismatch at some parse stage (expected digits, an operator, an identifier, a literal tag...)
- DivisionByZero: division whose right operand is zero
- UnboundName: lookup of a name that was never bound
- IntegerOverflow: number literal or arithmetic result that does not fit in a signed 32-bit integer
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw an eldiro error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        super().__init__(msg.format(*exprs))

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal


class Malformed(GenericException):
    """Syntactic mismatch. remainder is the unconsumed input at the point of failure."""

    def __init__(self, expected, remainder):
        self.expected = expected
        self.remainder = remainder
        super().__init__("expected {}", [expected], end=0, diagnosis=False)

    def locate(self, source):
        """Points this error at its column in source, the full line remainder was sliced from."""
        self.expr = source
        self.start = len(source) - len(self.remainder)
        self.end = self.start + 1
        self.diagnosis = True
        return self


class DivisionByZero(GenericException):

    def __init__(self, expr=""):
        if not expr:
            super().__init__("division by zero", diagnosis=False)
        else:
            super().__init__("'{}' divides by zero", expr)


class UnboundName(GenericException):

    def __init__(self, name):
        self.name = name
        super().__init__("binding with name '{}' does not exist", name, diagnosis=False)


class IntegerOverflow(GenericException):
    """Raised for literals and arithmetic results outside the signed 32-bit range."""

    def __init__(self, expr):
        super().__init__("'{}' overflows a 32-bit integer", str(expr), diagnosis=False)


class ErrorHandler:
    """Context manager that prints eldiro errors as colored reports, then exits (fatal) or suppresses them and resets
    the traceback (non-fatal). Any other exception is reported as internal and re-raised.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        error_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                error_msg += colored(f"{file}:{line_num}: ", attrs=["bold"])
                break
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        self.report(error)

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # reset lines, keep registered files

    def report(self, error):
        """Prints error with its traceback and diagnosis. Does not exit."""
        error_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
            return True

        # not an eldiro error: report it, then let it propagate
        self.report(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
        return False
