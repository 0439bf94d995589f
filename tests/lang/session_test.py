import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from arith.lang.error import ErrorHandler, GenericException, LexError, StuckTermError
from arith.lang.lexical import Succ, Zero
from arith.lang.session import Session
from arith.lang.shell import Shell
from arith.pure.lexical import TrueTerm


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()

    def session(self, **kwargs):
        return Session(ErrorHandler(), Session.SH_FILE, cmd_line=True, **kwargs)

    def run_session(self, sess, expr):
        with redirect_stdout(self.out):
            sess.add(expr)
            sess.run()
        return self.out.getvalue()

    def test_run(self):
        sess = self.session()
        self.assertEqual("succ 0\n", self.run_session(sess, "pred succ succ 0"))

        result = sess.results[-1]
        self.assertEqual("pred succ succ 0", result.source)
        self.assertEqual(Succ(Zero()), result.value)
        self.assertEqual({}, sess.to_exec)
        self.assertFalse(sess.error_handler.fatal)

    def test_numbers(self):
        self.assertEqual("2\n", self.run_session(self.session(numbers=True), "succ succ 0"))

    def test_render(self):
        sess = self.session(show_tokens=True, show_term=True, show_trace=True)
        output = self.run_session(sess, "pred succ succ 0")

        for header in ("tokens", "term", "trace", "value"):
            self.assertIn(f"-- {header} --", output, header)
        self.assertIn("PRED SUCC SUCC ZERO", output)
        self.assertNotIn("Token.", output)
        self.assertIn("Pred(expr='pred succ succ 0'", output)
        self.assertIn("E-PredSucc", output)
        self.assertEqual("succ 0", output.splitlines()[-1])

    def test_stuck(self):
        sess = self.session(show_trace=True)
        with redirect_stdout(self.out):
            sess.add("pred if true then false else 0")
            self.assertRaises(StuckTermError, sess.run)

        self.assertIn("E-Pred[E-IfTrue]", self.out.getvalue())
        self.assertEqual({}, sess.to_exec)
        self.assertEqual([], sess.results)

    def test_long_chain(self):
        sess = self.session(numbers=True)
        self.assertEqual("1000\n", self.run_session(sess, "succ " * 1000 + "pred 0"))

    def test_calculus(self):
        sess = self.session(calculus="bool")
        self.assertRaises(LexError, sess.add, "iszero 0")
        self.assertEqual("true\n", self.run_session(sess, "if false then false else true"))

        self.assertRaises(GenericException, self.session, calculus="nat")

    def test_reserved(self):
        self.assertRaises(GenericException, Session, ErrorHandler(), Session.SH_FILE, cmd_line=False)

    def test_preprocess(self):
        cases = {
            "  if true\n then 0 \t else 0 ": "if true then 0 else 0",
            "0": "0",
            "\n": "",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, Session.preprocess(case), case)

    def test_file(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "program.arith")
            with open(path, "w") as file:
                file.write("if iszero 0\nthen succ 0\nelse 0\n")

            sess = Session(ErrorHandler(), path)
            with redirect_stdout(self.out):
                sess.run()

        self.assertEqual("succ 0\n", self.out.getvalue())
        self.assertTrue(sess.error_handler.fatal)

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "missing.arith")
            self.assertRaises(GenericException, Session, ErrorHandler(), path)


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True))
        self.out = io.StringIO()

    def onecmd(self, line):
        with redirect_stdout(self.out):
            return self.shell.onecmd(line)

    def test_error_does_not_stop_shell(self):
        for line in ("pred true", "xyz", "(iszero 0)", "then", "iszero 0"):
            self.assertFalse(self.onecmd(line), line)

        output = self.out.getvalue()
        self.assertEqual(4, output.count("error: "))
        self.assertIn("unrecognized character", output)
        self.assertIn("<in>:3: (iszero 0)", output)
        self.assertEqual("true", output.splitlines()[-1])
        self.assertEqual(5, self.shell.line_num)
        self.assertEqual(TrueTerm(), self.shell.sess.results[-1].value)

    def test_stuck_report(self):
        self.onecmd("if true then pred true else 0")

        output = self.out.getvalue()
        self.assertIn("<in>:1: if true then pred true else 0", output)
        self.assertIn("evaluating: if true then pred true else 0", output)
        self.assertIn("stuck at:   pred true", output)

    def test_programs(self):
        cases = ["0", "iszero 0", "if true then 0 else 0", "succ 0"]
        for case in cases:
            self.onecmd(case)
        self.assertEqual(["0", "true", "0", "succ 0"], self.out.getvalue().splitlines())

    def test_exit(self):
        for line in ("exit", "quit", "EOF"):
            self.assertTrue(self.onecmd(line), line)
        self.assertFalse(self.onecmd(""))

    def test_toggle(self):
        self.onecmd("numbers on")
        self.assertTrue(self.shell.sess.numbers)
        self.onecmd("succ succ 0")
        self.assertEqual("2", self.out.getvalue().splitlines()[-1])

        self.onecmd("trace")
        self.assertTrue(self.shell.sess.show_trace)
        self.onecmd("trace")
        self.assertFalse(self.shell.sess.show_trace)

        self.onecmd("ast maybe")
        self.assertFalse(self.shell.sess.show_term)
        self.assertIn("error: ", self.out.getvalue())

        self.onecmd("tokens off")
        self.assertFalse(self.shell.sess.show_tokens)


if __name__ == '__main__':
    unittest.main()
