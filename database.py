"""
Database Manager for CalcStack
Handles SQLite storage of finished calculations
"""
import sqlite3
from datetime import datetime
import config

class Database:
    def __init__(self, db_path=config.DB_PATH):
        self.db_path = db_path
        self.init_database()

    def get_connection(self):
        """Create and return a database connection"""
        return sqlite3.connect(self.db_path)

    def init_database(self):
        """Initialize database tables"""
        conn = self.get_connection()
        cursor = conn.cursor()

        # Calculations history table
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS calculations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                expression TEXT NOT NULL,
                result TEXT NOT NULL,
                timestamp TEXT NOT NULL
            )
        ''')

        conn.commit()
        conn.close()

    def add_calculation(self, expression, result):
        """Add calculation to history"""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('''
            INSERT INTO calculations (expression, result, timestamp)
            VALUES (?, ?, ?)
        ''', (expression, result, timestamp))
        conn.commit()
        calc_id = cursor.lastrowid
        conn.close()
        return calc_id

    def get_calculations(self, limit=config.MAX_HISTORY_ITEMS):
        """Retrieve calculation history, newest first"""
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('''
            SELECT expression, result, timestamp FROM calculations
            ORDER BY timestamp DESC, id DESC LIMIT ?
        ''', (limit,))
        calculations = cursor.fetchall()
        conn.close()
        return calculations

    def clear_history(self):
        """Clear calculation history"""
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('DELETE FROM calculations')
        conn.commit()
        conn.close()
