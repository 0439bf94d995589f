"""Handles interactive/command-line mode for the arith interpreter. Uses cmd as backend."""

import cmd

from arith.lang.error import GenericException


class Shell(cmd.Cmd):
    """Arith interpreter shell. Every line that isn't a command is one program."""
    intro = "Untyped arithmetic expressions :: small-step evaluator\nType '?' or 'help' for more information."
    prompt = "> "
    SWITCHES = {"on": True, "off": False}

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def default(self, line):
        """Lexes, parses and evaluates line."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            self.sess.add(line, self.line_num)
            self.sess.run()

    def toggle(self, attr, arg):
        """Sets session flag attr from arg ('on'/'off'), or flips it if arg is empty."""
        with self.sess.error_handler:
            if not arg:
                value = not getattr(self.sess, attr)
            elif arg in Shell.SWITCHES:
                value = Shell.SWITCHES[arg]
            else:
                raise GenericException("expected 'on' or 'off', got '{}'", arg)

            setattr(self.sess, attr, value)
            print(f"{attr}: {'on' if value else 'off'}")

    def do_tokens(self, arg):
        """Toggles rendering of the token sequence: tokens [on|off]"""
        self.toggle("show_tokens", arg)

    def do_ast(self, arg):
        """Toggles rendering of the syntax tree: ast [on|off]"""
        self.toggle("show_term", arg)

    def do_trace(self, arg):
        """Toggles rendering of every reduction step and its rules: trace [on|off]"""
        self.toggle("show_trace", arg)

    def do_numbers(self, arg):
        """Toggles rendering of numeric values as decimals: numbers [on|off]"""
        self.toggle("numbers", arg)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the arith interpreter!\n\n"
              "Terms are booleans, conditionals and natural numbers written in unary: \n"
              "  true, false, if t1 then t2 else t3, 0, succ t, pred t, iszero t\n"
              "Each line is evaluated step by step until no evaluation rule applies; if \n"
              "the result is not a value, the term is stuck. Try 'pred succ succ 0', \n"
              "then 'pred true'.\n\n"
              "Commands: tokens, ast, trace, numbers [on|off] toggle extra output; \n"
              "exit or quit leaves.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True

    def do_quit(self, arg):
        """Exits interpreter."""
        return self.do_exit(arg)
