"""Handles interactive/command-line mode for the calculator. Uses cmd as backend."""

import cmd

from calculator.calc import calculate


class Shell(cmd.Cmd):
    """Prefix calculator shell."""
    intro = "Prefix calculator :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "

    def __init__(self, error_handler, logger=None, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.error_handler = error_handler
        self.error_handler.fatal = False
        self.logger = logger

    def default(self, line):
        """Evaluates arbitrary expression."""
        with self.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            result = calculate(line.strip(), self.logger)
            if result.ok:
                print(result.value, file=self.stdout)
            else:
                self.error_handler.throw(result.error)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the prefix calculator!\n\n"
              "Expressions are integers or operator calls in prefix notation. The operators \n"
              "add, sub, mult and div take two expressions: try typing 'add(sub(213,54),45)'.\n\n"
              "let binds a variable to a value inside a body expression. For example, \n"
              "'let(aVar,sub(134,58),div(aVar,3))' binds 'aVar' to 76, then divides it by 3, \n"
              "giving 25 as the result.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits calculator."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits calculator."""
        return True
