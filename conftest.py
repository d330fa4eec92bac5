import pytest

from api import create_app
from calculator import CalculatorBrain
from database import Database
from history_manager import HistoryManager
from session import CalculatorSession


@pytest.fixture
def brain():
    return CalculatorBrain()


@pytest.fixture
def db(tmp_path):
    return Database(str(tmp_path / "calcstack-test.db"))


@pytest.fixture
def history_manager(db):
    return HistoryManager(db)


@pytest.fixture
def session(history_manager):
    return CalculatorSession(history_manager=history_manager)


@pytest.fixture
def app(tmp_path):
    app = create_app(db_path=str(tmp_path / "calcstack-api.db"))
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
