# tests/conftest.py
import copy
import sys
from contextlib import contextmanager
from pathlib import Path

import psycopg
import pytest
from bs4 import BeautifulSoup

# Add project root to sys.path so `cpp_catalog` is importable without install
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from cpp_catalog.errors import NavigationError


# ============================================================
# FAKE BROWSER
# ============================================================

class FakePage:
    """Stand-in for :class:`cpp_catalog.scrape.browser.PageHandle`.

    ``wait_for`` reports whether the selector matches the canned HTML.
    """

    def __init__(self, html, url):
        self.html = html
        self.url = url
        self.clicked = []
        self.selected = []

    def wait_for(self, selector, timeout=None):
        return BeautifulSoup(self.html, "html.parser").select_one(selector) is not None

    def click(self, selector):
        self.clicked.append(selector)

    def select(self, selector, value):
        self.selected.append((selector, value))

    def content(self):
        return self.html


class FakeSession:
    """Stand-in for :class:`cpp_catalog.scrape.browser.BrowserSession`.

    :param pages: Mapping of URL to HTML string, or to an exception
        instance to simulate a failed navigation.
    :type pages: dict
    """

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.visited = []
        self.open_pages = 0
        self.last_page = None

    @contextmanager
    def open_page(self, url, timeout=None):
        self.visited.append(url)
        result = self.pages.get(url)
        if result is None:
            raise NavigationError(url, "net::ERR_NAME_NOT_RESOLVED")
        if isinstance(result, Exception):
            raise NavigationError(url, str(result))
        self.open_pages += 1
        try:
            self.last_page = FakePage(result, url)
            yield self.last_page
        finally:
            self.open_pages -= 1


# ============================================================
# FAKE HTML
# ============================================================

LISTING_URL = "https://www.cpp.edu/programs/index.shtml"

#: Listing grouped by college; one hidden program and one duplicate major.
LISTING_HTML = """
<html><body>
<input type="checkbox" id="type0">
<select id="viewType"><option value="byCollege">By College</option></select>
<div class="college">
  <h2 class="college-heading">College of Engineering</h2>
  <div class="dept-programs">
    <h3 class="dept-heading">Aerospace Engineering</h3>
    <ul class="program-list">
      <li><span ng-show="true"><span ng-show="true">
        <a class="program-link" href="/programs/eng/aerospace.shtml">Aerospace Engineering, B.S.</a>
      </span></span></li>
      <li><span ng-show="false"><span ng-show="true">
        <a class="program-link" href="/programs/eng/hidden.shtml">Aerospace Engineering, M.S.</a>
      </span></span></li>
    </ul>
  </div>
  <div class="dept-programs">
    <h3 class="dept-heading">Chemical and Materials Engineering</h3>
    <ul class="program-list">
      <li><span ng-show="true"><span ng-show="true">
        <a class="program-link" href="/programs/eng/chemical.shtml">Chemical Engineering, B.S.</a>
      </span></span></li>
      <li><span ng-show="true"><span ng-show="true">
        <a class="program-link" href="/programs/eng/materials.shtml">Materials Engineering, B.S.</a>
      </span></span></li>
    </ul>
  </div>
</div>
<div class="college">
  <h2 class="college-heading">College of Letters, Arts, and Social Sciences</h2>
  <div class="dept-programs">
    <h3 class="dept-heading">Sociology</h3>
    <ul class="program-list">
      <li><span ng-show="true"><span ng-show="true">
        <a class="program-link" href="/programs/class/sociology-general.shtml">Sociology, B.A. - General Sociology</a>
      </span></span></li>
      <li><span ng-show="true"><span ng-show="true">
        <a class="program-link" href="https://www.cpp.edu/programs/class/sociology.shtml">Sociology, B.A.</a>
      </span></span></li>
    </ul>
  </div>
</div>
</body></html>
"""


def detail_html(text):
    """Return a major page whose description block holds ``text``."""
    return f"""
    <html><body>
      <h1>Program</h1>
      <p class="body1 eggshell-heading-stat-box__copy">
        {text}
      </p>
    </body></html>
    """


#: Major page without a description block.
DETAIL_HTML_EMPTY = "<html><body><h1>Program</h1><p class='body1'>Other</p></body></html>"


@pytest.fixture
def listing_pages():
    """Return listing plus detail pages for every program in :data:`LISTING_HTML`.

    Materials Engineering has no description block so the fallback applies.
    """
    base = "https://www.cpp.edu/programs"
    return {
        LISTING_URL: LISTING_HTML,
        f"{base}/eng/aerospace.shtml": detail_html("Study  aircraft\n and spacecraft."),
        f"{base}/eng/chemical.shtml": detail_html("Turn chemistry into products."),
        f"{base}/eng/materials.shtml": DETAIL_HTML_EMPTY,
        f"{base}/class/sociology.shtml": detail_html("Study society."),
    }


# ============================================================
# FAKE DATABASE
# ============================================================

def _query_text(query):
    return query.as_string(None) if hasattr(query, "as_string") else str(query)


class FakeDatabase:
    """In-memory tables shared by every :class:`FakeConnection` it hands out.

    Understands the statements issued by :mod:`cpp_catalog.load_data` and
    :mod:`cpp_catalog.query_data` and applies the same uniqueness keys as
    the real schema.

    :param fail_on: Optional SQL fragment; executing a statement containing
        it raises ``psycopg.Error``.
    :type fail_on: str or None
    """

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.tables_created = False
        self.colleges = {}
        self.departments = {}
        self.majors = {}
        self.connections = 0

    def snapshot(self):
        return copy.deepcopy((self.colleges, self.departments, self.majors))

    def restore(self, state):
        self.colleges, self.departments, self.majors = state

    def row_counts(self):
        return {
            "colleges": len(self.colleges),
            "departments": len(self.departments),
            "majors": len(self.majors),
        }

    def connect(self, *args, **kwargs):
        self.connections += 1
        return FakeConnection(self)

    def execute(self, query, params):
        text = _query_text(query)

        if self.fail_on and self.fail_on in text:
            raise psycopg.Error("simulated database failure")

        if "CREATE TABLE" in text:
            self.tables_created = True
            return None

        if "INSERT INTO college" in text:
            (name,) = params
            return (self.colleges.setdefault(name, len(self.colleges) + 1),)

        if "INSERT INTO department" in text:
            key = tuple(params)
            return (self.departments.setdefault(key, len(self.departments) + 1),)

        if "INSERT INTO major" in text:
            name, url, description, department_id = params
            key = (name, department_id)
            row = self.majors.get(key)
            if row is None:
                row = self.majors[key] = {"id": len(self.majors) + 1}
            row["url"] = url
            row["description"] = description
            return (row["id"],)

        for table, rows in (("college", self.colleges),
                            ("department", self.departments),
                            ("major", self.majors)):
            if f"FROM {table};" in text:
                return (len(rows),)

        raise AssertionError(f"Unexpected query: {text}")


class FakeCursor:
    """Fake psycopg3 cursor that routes statements to a :class:`FakeDatabase`."""

    def __init__(self, db):
        self.db = db
        self.executed_queries = []
        self._last = None

    def execute(self, query, params=None):
        self.executed_queries.append(query)
        self._last = self.db.execute(query, params)

    def fetchone(self):
        return self._last

    def __enter__(self):
        return self

    def __exit__(self, *args):
        pass


class FakeConnection:
    """Fake psycopg3 connection with transaction rollback on error.

    Entering the connection snapshots the tables; leaving it with an
    exception restores the snapshot, as a real rollback would.
    """

    def __init__(self, db):
        self.db = db
        self.closed = False
        self._snapshot = None

    def cursor(self):
        return FakeCursor(self.db)

    def __enter__(self):
        self._snapshot = self.db.snapshot()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.db.restore(self._snapshot)
        self.closed = True
        return False


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def fake_db():
    """Return an empty :class:`FakeDatabase`."""
    return FakeDatabase()


@pytest.fixture
def patch_db(monkeypatch):
    """Route every ``create_connection`` call to a shared fake database.

    :returns: Function taking an optional :class:`FakeDatabase` and
        returning the database in use.
    """
    from cpp_catalog import load_data, query_data

    def _patch(db=None):
        db = db or FakeDatabase()
        monkeypatch.setattr(load_data, "create_connection", db.connect)
        monkeypatch.setattr(query_data, "create_connection", db.connect)
        return db

    return _patch


# ------------------------------
# Markers for pytest
# ------------------------------
def pytest_configure(config):
    config.addinivalue_line("markers", "clean: name normalization and dedup")
    config.addinivalue_line("markers", "scrape: listing and detail page parsing")
    config.addinivalue_line("markers", "enrich: description enrichment and fallbacks")
    config.addinivalue_line("markers", "db: database schema/upserts/counts")
    config.addinivalue_line("markers", "integration: end-to-end pipeline runs")
