"""
Calculator Session for CalcStack
Wires button events to the engine, the input buffer and the memory cell
"""
from calculator import CalculatorBrain
from commands import EQUALS_BUTTON
from display import CalculatorInput


class CalculatorSession:
    def __init__(self, brain=None, history_manager=None):
        self.brain = brain if brain is not None else CalculatorBrain()
        self.history_manager = history_manager
        self.input = CalculatorInput()
        self.memory = 0.0
        # whether the user has started entering a new value
        self.user_is_typing = False

    @property
    def display(self):
        return self.input.value

    @property
    def history(self):
        return self.brain.render()

    def _start_typing(self):
        if not self.user_is_typing:
            self.input.clear()
            self.user_is_typing = True

    def enter_digit(self, digit):
        """Handle a digit button"""
        self._start_typing()
        return self.input.append(digit)

    def negate(self):
        """Handle the sign key of the input buffer"""
        self._start_typing()
        return self.input.negate()

    def decimal(self):
        """Handle the decimal point button"""
        self._start_typing()
        return self.input.decimal()

    def toggle_sign(self):
        """Flip the sign of the entry while typing, otherwise negate the result"""
        if self.user_is_typing:
            return self.input.negate()
        return self.operate('±')

    def clear(self):
        """First press clears the entry, a press on an empty entry resets the engine"""
        if not self.input.has_value or not self.user_is_typing:
            self.brain.reset()
        self.input.clear()
        self.user_is_typing = False
        return self.display

    def operate(self, button):
        """Apply an operator button to the displayed value"""
        self.user_is_typing = False
        value = self.brain.apply(button, self.input.operand())
        self.input = CalculatorInput.from_number(value)
        if button == EQUALS_BUTTON and self.history_manager is not None:
            self.history_manager.add_calculation(self.history, self.display)
        return self.display

    def undo(self):
        """Backspace while typing, otherwise step the engine back"""
        if self.user_is_typing and self.input.has_value:
            return self.input.delete()
        value, typing = self.brain.undo()
        self.input = CalculatorInput.from_operand(value)
        self.user_is_typing = typing
        return self.display

    def memory_operate(self, function):
        """Handle MC, MR, MS, M+ and M-"""
        if function == "MC":
            self.memory = 0.0
        elif function == "MR":
            self._show(self.memory)
        elif function == "MS":
            self.memory = self._display_value()
        elif function == "M+":
            self.memory += self._display_value()
            self._show(self.memory)
        elif function == "M-":
            self.memory -= self._display_value()
            self._show(self.memory)
        return self.display

    def _display_value(self):
        return self.brain.resolve(self.input.operand())

    def _show(self, value):
        self.input = CalculatorInput.from_number(value)
        self.user_is_typing = False

    def recall_variable(self, name):
        """Use a variable as the displayed operand"""
        return self.input.set_var(name)

    def set_variable(self, name):
        """Store the displayed value under a variable name"""
        value = self._display_value()
        self.brain.set_variable(name, value)
        return value

    def snapshot(self):
        return {
            'display': self.display,
            'history': self.history,
            'accumulator': self.brain.accumulator,
            'memory': self.memory,
            'typing': self.user_is_typing,
            'variables': self.brain.get_variables(),
        }
