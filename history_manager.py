"""
History Manager for CalcStack
Manages the log of finished calculations
"""
import config

class HistoryManager:
    def __init__(self, db):
        self.db = db

    def add_calculation(self, expression, result):
        """Add a calculation to history"""
        return self.db.add_calculation(expression, result)

    def get_calculation_history(self, limit=config.MAX_HISTORY_ITEMS):
        """Get calculation history"""
        return self.db.get_calculations(limit)

    def clear_calculation_history(self):
        """Clear all calculation history"""
        self.db.clear_history()

    def format_calculation_history(self, limit=config.MAX_HISTORY_ITEMS):
        """Format calculation history for display"""
        history = self.get_calculation_history(limit)
        formatted = []

        for expr, result, timestamp in history:
            formatted.append(f"{timestamp}: {expr} {result}")

        return formatted
