"""
Command stack for CalcStack
Operator table, history commands and the stack that records them
"""
import math
from collections import namedtuple

from operands import resolve, format_operand

# Operation kinds
CONSTANT = 'constant'
UNARY = 'unary'
BINARY = 'binary'
EQUALS = 'equals'

EQUALS_BUTTON = '='
SQUARE_BUTTON = 'x²'

# kind + argument: a function id for unary/binary, the value for constants
Operation = namedtuple('Operation', 'kind argument')


def _divide(a, b):
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _sqrt(x):
    return math.sqrt(x) if x >= 0 else math.nan


def _trig(function):
    def apply(x):
        if math.isinf(x):
            return math.nan
        return function(x)
    return apply


FUNCTIONS = {
    'add': lambda a, b: a + b,
    'subtract': lambda a, b: a - b,
    'multiply': lambda a, b: a * b,
    'divide': _divide,
    'sin': _trig(math.sin),
    'cos': _trig(math.cos),
    'tan': _trig(math.tan),
    'sqrt': _sqrt,
    'square': lambda x: x * x,
    'negate': lambda x: -x,
}

OPERATIONS = {
    '+': Operation(BINARY, 'add'),
    '-': Operation(BINARY, 'subtract'),
    '×': Operation(BINARY, 'multiply'),
    '÷': Operation(BINARY, 'divide'),
    'sin': Operation(UNARY, 'sin'),
    'cos': Operation(UNARY, 'cos'),
    'tan': Operation(UNARY, 'tan'),
    '√': Operation(UNARY, 'sqrt'),
    SQUARE_BUTTON: Operation(UNARY, 'square'),
    '±': Operation(UNARY, 'negate'),
    'π': Operation(CONSTANT, math.pi),
    'e': Operation(CONSTANT, math.e),
    EQUALS_BUTTON: Operation(EQUALS, None),
}


class Command(namedtuple('Command', 'previous button operation operand', defaults=(None,))):
    """One entry of the calculation history"""
    __slots__ = ()

    @property
    def is_pending(self):
        return self.operation.kind == BINARY and self.operand is None

    @property
    def is_binary(self):
        return self.operation.kind == BINARY

    @property
    def is_unary(self):
        return self.operation.kind == UNARY

    @property
    def is_equals(self):
        return self.operation.kind == EQUALS

    def execute(self, value, variables):
        """Run the command against the accumulator value"""
        kind = self.operation.kind
        if kind == BINARY:
            if self.operand is None:
                return value
            return FUNCTIONS[self.operation.argument](value, resolve(self.operand, variables))
        if kind == UNARY:
            return FUNCTIONS[self.operation.argument](value)
        if kind == CONSTANT:
            return self.operation.argument
        return value

    def describe(self, history):
        """Extend the history text with this command"""
        kind = self.operation.kind
        if kind == BINARY:
            operand = format_operand(self.operand) if self.operand is not None else ""
            return f"{history} {self.button} {operand}"
        if kind == UNARY:
            if self.button == SQUARE_BUTTON:
                return f"({history})²"
            return f"{self.button}({history})"
        if kind == EQUALS:
            return history + " ="
        return history

    def to_dict(self):
        return {
            'previous': format_operand(self.previous),
            'button': self.button,
            'kind': self.operation.kind,
            'operand': format_operand(self.operand) if self.operand is not None else None,
        }


class CommandStack:
    def __init__(self):
        self._commands = []

    def push(self, command):
        self._commands.append(command)

    def pop(self):
        return self._commands.pop()

    def top(self):
        """Most recent command, or None when empty"""
        return self._commands[-1] if self._commands else None

    def first(self):
        return self._commands[0] if self._commands else None

    def replace_top(self, **changes):
        """Pop the top command, push back a copy with the given fields changed"""
        command = self.pop()._replace(**changes)
        self.push(command)
        return command

    def clear(self):
        self._commands = []

    def __len__(self):
        return len(self._commands)

    def __iter__(self):
        return iter(list(self._commands))

    def __repr__(self):
        return f"CommandStack({self._commands!r})"
