"""
Calculator Engine for CalcStack
Applies button presses to the accumulator through a command stack,
with repeatable equals, undo and variable operands
"""
import config
from commands import BINARY, CONSTANT, EQUALS, OPERATIONS, Command, CommandStack
from operands import Number, VariableTable, resolve, format_operand


class CalculatorBrain:
    def __init__(self, reset_clears_variables=config.RESET_CLEARS_VARIABLES):
        self.accumulator = 0.0
        self.stack = CommandStack()
        self.variables = VariableTable()
        self.operations = OPERATIONS
        self.reset_clears_variables = reset_clears_variables

    def reset(self):
        """Clear the accumulator and the command stack"""
        self.accumulator = 0.0
        self.stack.clear()
        if self.reset_clears_variables:
            self.variables.clear()

    def resolve(self, operand):
        return resolve(operand, self.variables)

    def set_variable(self, name, value):
        self.variables.set(name, value)

    def get_variable(self, name):
        return self.variables.get(name)

    def get_variables(self):
        return self.variables.as_dict()

    def apply(self, button, operand):
        """Apply a button press to the displayed operand and return the new display value"""
        value = self.resolve(operand)
        operation = self.operations.get(button)
        if operation is None:
            return value

        if operation.kind == CONSTANT:
            return operation.argument
        if operation.kind == EQUALS:
            self._equals(button, operation, operand, value)
            return self.accumulator

        was_empty = not len(self.stack)
        self._close_previous(value, operand)
        if operation.kind == BINARY:
            # a cleared stack keeps the accumulator, which may differ from the raw operand
            previous = operand if was_empty else Number(self.accumulator)
            self.stack.push(Command(previous, button, operation))
        else:
            command = Command(Number(self.accumulator), button, operation)
            self.stack.push(command)
            self.accumulator = command.execute(self.accumulator, self.variables)
        return self.accumulator

    def _close_previous(self, value, operand):
        """Settle the top of the stack before a new binary or unary command"""
        top = self.stack.top()
        if top is None:
            self.accumulator = value
        elif top.is_pending:
            self._complete_pending(operand)
        elif top.is_equals:
            # equals closes an expression; a changed display means a new value was entered
            equals = self.stack.pop()
            if self.resolve(equals.previous) != value:
                self.accumulator = value
            self.stack.clear()
        elif top.is_unary and self.accumulator != value:
            # display was edited after a unary result
            self.accumulator = value
            self.stack.clear()

    def _complete_pending(self, operand):
        command = self.stack.replace_top(operand=operand)
        self.accumulator = command.execute(self.accumulator, self.variables)

    def _equals(self, button, operation, operand, value):
        top = self.stack.top()
        if top is None:
            self.accumulator = value
            self.stack.push(Command(operand, button, operation))
        elif top.is_pending:
            self._complete_pending(operand)
            self.stack.push(Command(Number(self.accumulator), button, operation))
        elif top.is_equals:
            equals = self.stack.pop()
            last = self.stack.top()
            if last is not None:
                self._repeat(last)
            else:
                self.accumulator = value
            self.stack.push(equals._replace(previous=Number(self.accumulator)))
        else:
            self._repeat(top)

    def _repeat(self, command):
        """Re-run a command, with its original operand, on the current accumulator"""
        command = command._replace(previous=Number(self.accumulator))
        self.stack.push(command)
        self.accumulator = command.execute(self.accumulator, self.variables)

    def undo(self):
        """Step back one command.

        Returns the operand to put back on the display and whether the user
        is typing again.
        """
        if not len(self.stack):
            return Number(0.0), False

        undone = self.stack.pop()
        top = self.stack.top()
        if top is None:
            return undone.previous, True

        if top.is_binary:
            # reopen the binary command and hand its operand back to the input
            self.stack.replace_top(operand=None)
            self.accumulator = self.resolve(top.previous)
            if top.operand is None:
                return Number(self.accumulator), True
            return top.operand, True

        if top.is_unary:
            self.accumulator = self.resolve(undone.previous)
        return Number(self.accumulator), False

    def render(self):
        """Left-to-right transcript of the command stack"""
        first = self.stack.first()
        if first is None:
            return "0"
        history = format_operand(first.previous)
        for command in self.stack:
            history = command.describe(history)
        return history

    def commands(self):
        return [command.to_dict() for command in self.stack]
