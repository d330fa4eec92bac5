"""
Operands for CalcStack
Literal numbers, variable references and the variable table they resolve against
"""
from collections import namedtuple

Number = namedtuple('Number', 'value')
Variable = namedtuple('Variable', 'name')


class VariableTable:
    """Variable name -> value. Unknown names are created as 0.0 on first use."""

    def __init__(self):
        self.values = {}

    def get(self, name):
        return self.values.setdefault(name, 0.0)

    def set(self, name, value):
        self.values[name] = float(value)

    def clear(self):
        self.values.clear()

    def as_dict(self):
        return dict(self.values)

    def __contains__(self, name):
        return name in self.values

    def __len__(self):
        return len(self.values)


def resolve(operand, table):
    """Resolve an operand to its numeric value"""
    if isinstance(operand, Variable):
        return table.get(operand.name)
    return float(operand.value)


def format_number(value):
    """Format a value for display and history text"""
    value = float(value)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    # repr keeps every digit so the text parses back to the same float
    return repr(value)


def format_operand(operand):
    if isinstance(operand, Variable):
        return operand.name
    return format_number(operand.value)


def parse_operand(text):
    """Numeric text becomes a Number, anything else a Variable"""
    try:
        return Number(float(text))
    except (TypeError, ValueError):
        return Variable(str(text))
