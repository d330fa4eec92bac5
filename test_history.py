"""
Test calculation history storage and formatting
"""


def test_calculations_newest_first(history_manager):
    history_manager.add_calculation("3 + 4 =", "7")
    history_manager.add_calculation("√(16)", "4")

    history = history_manager.get_calculation_history()
    assert [(expr, result) for expr, result, _ in history] == [
        ("√(16)", "4"),
        ("3 + 4 =", "7"),
    ]
    assert len(history_manager.get_calculation_history(limit=1)) == 1


def test_format_calculation_history(history_manager):
    history_manager.add_calculation("5 + 2 + 2 =", "9")
    formatted = history_manager.format_calculation_history()
    assert len(formatted) == 1
    assert formatted[0].endswith(": 5 + 2 + 2 = 9")


def test_clear_calculation_history(history_manager, db):
    history_manager.add_calculation("1 + 1 =", "2")
    history_manager.clear_calculation_history()
    assert history_manager.get_calculation_history() == []
    assert db.get_calculations() == []


def test_database_reopens_existing_file(db):
    from database import Database

    db.add_calculation("2 × 3 =", "6")
    reopened = Database(db.db_path)
    assert reopened.get_calculations()[0][:2] == ("2 × 3 =", "6")


def test_default_limit_follows_config(history_manager):
    import config

    for i in range(config.MAX_HISTORY_ITEMS + 5):
        history_manager.add_calculation(f"{i} + 1 =", str(i + 1))
    assert len(history_manager.get_calculation_history()) == config.MAX_HISTORY_ITEMS
    assert len(history_manager.format_calculation_history()) == config.MAX_HISTORY_ITEMS
