"""
Input buffer for CalcStack
Holds the value currently being typed, as a string
"""
from operands import Number, Variable, format_number, parse_operand

DEFAULT_VALUE = "0"
EDITABLE_CHARS = set("0123456789.")


class CalculatorInput:
    def __init__(self, value=DEFAULT_VALUE):
        self.value = str(value)

    @classmethod
    def from_operand(cls, operand):
        """Build the buffer shown for an engine result or undone operand"""
        if isinstance(operand, Variable):
            return cls(operand.name)
        return cls(format_number(operand.value))

    @classmethod
    def from_number(cls, value):
        return cls.from_operand(Number(value))

    @property
    def has_value(self):
        """True once the buffer differs from its default"""
        return self.value != DEFAULT_VALUE

    @property
    def is_variable(self):
        return isinstance(self.operand(), Variable)

    @property
    def is_editable(self):
        """Plain digit text; results such as 1e-05, inf or nan and variables are not"""
        digits = self.value[1:] if self.value.startswith("-") else self.value
        return bool(digits) and all(ch in EDITABLE_CHARS for ch in digits)

    def operand(self):
        return parse_operand(self.value)

    def clear(self):
        self.value = DEFAULT_VALUE
        return self.value

    def append(self, digit):
        """Add a digit to the end of the current input"""
        digit = str(digit)
        if not self.is_editable:
            self.clear()
        if self.value == "-0":
            self.value = "-" + digit
        elif self.has_value:
            self.value += digit
        elif digit != "0":
            self.value = digit
        return self.value

    def negate(self):
        """Toggle the leading minus sign"""
        if self.is_variable:
            return self.value
        if self.value.startswith("-"):
            self.value = self.value[1:]
        else:
            self.value = "-" + self.value
        return self.value

    def decimal(self):
        """Add a decimal point unless one is already present"""
        if not self.is_editable:
            self.clear()
        if "." not in self.value:
            self.value += "."
        return self.value

    def delete(self):
        """Remove the last character (backspace)"""
        if not self.is_editable:
            return self.clear()
        self.value = self.value[:-1]
        if self.value in ("", "-"):
            self.value = DEFAULT_VALUE
        return self.value

    def set_var(self, name):
        """Show a variable reference instead of a number"""
        self.value = name
        return self.value

    def __repr__(self):
        return f"CalculatorInput({self.value!r})"
