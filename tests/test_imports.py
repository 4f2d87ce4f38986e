"""
Smoke tests to verify all modules can be imported.
"""

def test_import_quiz_core():
    import quiz_core
    assert hasattr(quiz_core, '__version__')


def test_import_store():
    import store
    assert hasattr(store, '__version__')


def test_import_game():
    import game
    assert hasattr(game, '__version__')
