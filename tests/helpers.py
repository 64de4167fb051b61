from iku.types.ast import Call, Function, Lit, Program


# Small helpers for building trees by hand in evaluator tests.
def lit(value):
    return Lit(value)


def call(name, *args):
    return Call(name, tuple(args))


def print_(expr):
    return Call("print", (expr,))


def main(*body, functions=()):
    """Program whose main runs `body`, plus any extra functions."""
    return Program(tuple(functions) + (Function("main", (), tuple(body)),))
