import pytest
import tempfile
import shutil
import os
from io import StringIO

from rich.console import Console

import docbrowse.config
from docbrowse.db import Database
from docbrowse.models import Document


class ScriptedPrompter:
    """
    Prompter stand-in that replays a fixed list of answers.

    Select answers may be a label or an index. Text answers rejected by the
    validator are recorded and the next answer is tried, the way the real
    prompt re-asks until the input passes.
    """

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = []
        self.rejections = []

    def select(self, label, items):
        self.calls.append(("select", label, list(items)))
        answer = self.answers.pop(0)
        index = items.index(answer) if isinstance(answer, str) else answer
        return index, items[index]

    def text(self, label, validate=None):
        while True:
            answer = self.answers.pop(0)
            self.calls.append(("text", label, answer))
            if validate is None:
                return answer
            try:
                validate(answer)
                return answer
            except ValueError as e:
                self.rejections.append(str(e))


def seed(db, collection, documents, parent=''):
    """Insert {doc_id: data} documents into a collection."""
    with db.session() as session:
        for doc_id, data in documents.items():
            session.add(Document(parent=parent, collection=collection, doc_id=doc_id, data=data))


@pytest.fixture(autouse=True)
def reset_config():
    """Give every test a fresh configuration instance."""
    docbrowse.config._config = None
    yield
    docbrowse.config._config = None


@pytest.fixture
def temp_db():
    """Create a temporary database file path."""
    temp_dir = tempfile.mkdtemp(prefix="docbrowse_test_db_")
    db_path = os.path.join(temp_dir, "test.db")
    yield db_path
    shutil.rmtree(temp_dir)


@pytest.fixture
def sample_users():
    return {
        "alice": {"name": "Alice", "age": 34, "tags": ["admin", "staff"], "address": {"city": "Kyoto"}},
        "bob": {"name": "Bob", "age": 25, "tags": ["staff"]},
        "carol": {"name": "Carol", "age": 30, "tags": []},
        "dave": {"name": "Dave", "age": 41.5, "tags": ["guest"]},
        "erin": {"name": "Erin", "age": "100"},
    }


@pytest.fixture
def sample_orders():
    return {
        f"ord-{i:03d}": {"total": i * 10, "status": "open" if i % 2 else "closed"}
        for i in range(1, 26)
    }


@pytest.fixture
def populated_db(temp_db, sample_users, sample_orders):
    """Database with 'users' (5 docs), 'orders' (25 docs) and a nested collection."""
    db = Database(path=temp_db, create=True)
    seed(db, "users", sample_users)
    seed(db, "orders", sample_orders)
    seed(db, "posts", {"p1": {"title": "Hello"}}, parent="users/alice")
    yield db
    db.close()


@pytest.fixture
def console():
    """Console writing plain text into a buffer."""
    return Console(file=StringIO(), width=200, color_system=None, force_terminal=False)


@pytest.fixture
def output(console):
    """Read back everything printed to the test console."""
    return lambda: console.file.getvalue()


@pytest.fixture
def seeder():
    """Expose seed() to tests that add documents."""
    return seed


@pytest.fixture
def make_prompter():
    return ScriptedPrompter
