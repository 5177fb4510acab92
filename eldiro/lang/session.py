"""Session control for the eldiro language. A session owns one binding environment for its whole lifetime and runs
single-line statements against it, reporting any errors through its error handler.
"""

from eldiro.lang.env import Env
from eldiro.lang.error import Malformed
from eldiro.lang.lexical import Binding, Stmt


class Session:
    """Governs an eldiro session, with control over the bindings in its environment."""
    SH_FILE = "<in>"  # traceback name for statements that do not come from a file

    def __init__(self, error_handler, path=SH_FILE):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path  # used for error messages

        self.env = Env()
        self.to_exec = {}  # dict of line num: (line, Stmt) to evaluate on run
        self.results = []  # values of evaluated ExprStmts, oldest first

    def add(self, line, line_num):
        """Parses line and queues the resulting statement. Evaluation is delayed until run is called. Returns the
        statement, or None if it could not be parsed and the error handler is not fatal.
        """
        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        with self.error_handler:
            try:
                stmt = Stmt.infer(line)
            except Malformed as error:
                raise error.locate(Stmt.preprocess(line))

            self.to_exec[line_num] = (line, stmt)
            self.error_handler.remove_line(self.path)  # error was not raised
            return stmt

    def run(self):
        """Runs this session's queued statements in line order. Bindings update self.env, and every other statement's
        value is appended to self.results. A statement that fails is dropped and the rest are still run.
        """
        for line_num, (line, stmt) in sorted(self.to_exec.items()):
            del self.to_exec[line_num]
            self.error_handler.register_line(self.path, line, line_num)

            with self.error_handler:
                overwrites = isinstance(stmt, Binding) and stmt.name in self.env
                value = stmt.eval(self.env)  # raises before storing

                if overwrites:
                    self.error_handler.warn("'{}' overwrites previous binding", stmt.name, diagnosis=False)
                if value is not None:
                    self.results.append(value)

                self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()

    def lookup(self, name):
        """Returns the value bound to name. Raises UnboundName rather than reporting it."""
        return self.env.lookup(name)
